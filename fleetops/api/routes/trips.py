"""
Trip endpoints
==============

POST /api/trips                           -- create a trip (always starts PENDING)
GET  /api/trips/{trip_id}                 -- fetch one trip
GET  /api/trips/driver/{driver_id}/active -- IN_PROGRESS, else PENDING, else 204
GET  /api/trips/driver/{driver_id}        -- all trips of a driver
GET  /api/trips/customer/{customer_id}    -- all trips of a customer
PUT  /api/trips/{trip_id}/status?status=  -- set status (COMPLETED stamps end time)
"""

from fastapi import APIRouter, Depends, Query, Request, Response

from fleetops.api.dependencies import get_trip_service
from fleetops.api.middleware import limiter
from fleetops.api.schemas import TripCreateRequest, TripResponse
from fleetops.config import settings
from fleetops.domain.enums import TripStatus
from fleetops.services.trips import TripService

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("", status_code=201, response_model=TripResponse, summary="Create a trip")
@limiter.limit(settings.rate_limit)
async def create_trip(
    request: Request,
    body: TripCreateRequest,
    trips: TripService = Depends(get_trip_service),
):
    trip = await trips.create(body.to_entity())
    return TripResponse.model_validate(trip)


@router.get(
    "/driver/{driver_id}/active",
    response_model=TripResponse,
    summary="Get a driver's active trip",
    responses={204: {"description": "Driver has no active trip"}},
)
@limiter.limit(settings.rate_limit)
async def get_active_trip(
    request: Request,
    driver_id: int,
    trips: TripService = Depends(get_trip_service),
):
    trip = await trips.active_for_driver(driver_id)
    if trip is None:
        return Response(status_code=204)
    return TripResponse.model_validate(trip)


@router.get(
    "/driver/{driver_id}",
    response_model=list[TripResponse],
    summary="List a driver's trips",
)
@limiter.limit(settings.rate_limit)
async def get_driver_trips(
    request: Request,
    driver_id: int,
    trips: TripService = Depends(get_trip_service),
):
    return [TripResponse.model_validate(t) for t in await trips.for_driver(driver_id)]


@router.get(
    "/customer/{customer_id}",
    response_model=list[TripResponse],
    summary="List a customer's trips",
)
@limiter.limit(settings.rate_limit)
async def get_customer_trips(
    request: Request,
    customer_id: int,
    trips: TripService = Depends(get_trip_service),
):
    return [
        TripResponse.model_validate(t) for t in await trips.for_customer(customer_id)
    ]


@router.get("/{trip_id}", response_model=TripResponse, summary="Get a trip")
@limiter.limit(settings.rate_limit)
async def get_trip(
    request: Request,
    trip_id: int,
    trips: TripService = Depends(get_trip_service),
):
    return TripResponse.model_validate(await trips.get(trip_id))


@router.put(
    "/{trip_id}/status",
    response_model=TripResponse,
    summary="Update a trip's status",
    description=(
        "Applies any known status without checking the transition. "
        "Setting COMPLETED records the end time."
    ),
)
@limiter.limit(settings.rate_limit)
async def update_trip_status(
    request: Request,
    trip_id: int,
    status: TripStatus = Query(...),
    trips: TripService = Depends(get_trip_service),
):
    trip = await trips.set_status(trip_id, status)
    return TripResponse.model_validate(trip)
