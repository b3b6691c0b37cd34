"""
Vehicle endpoints
=================

GET    /api/vehicles                    -- list all vehicles (open)
POST   /api/vehicles                    -- create (ADMIN, FLEET_MANAGER)
GET    /api/vehicles/driver/{driver_id} -- vehicle assigned to a driver (DRIVER, ADMIN)
PUT    /api/vehicles/{vehicle_id}       -- full replace (ADMIN, FLEET_MANAGER)
DELETE /api/vehicles/{vehicle_id}       -- delete (ADMIN)
"""

from fastapi import APIRouter, Depends, Request, Response

from fleetops.api.dependencies import get_current_identity, get_vehicle_service
from fleetops.api.middleware import limiter
from fleetops.api.schemas import VehicleRequest, VehicleResponse
from fleetops.config import settings
from fleetops.domain.entities import Identity
from fleetops.services.vehicles import VehicleService

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.get("", response_model=list[VehicleResponse], summary="List all vehicles")
@limiter.limit(settings.rate_limit)
async def list_vehicles(
    request: Request,
    vehicles: VehicleService = Depends(get_vehicle_service),
):
    return [VehicleResponse.model_validate(v) for v in await vehicles.list_all()]


@router.post(
    "",
    status_code=201,
    response_model=VehicleResponse,
    summary="Create a vehicle",
    description="Status defaults to AVAILABLE when omitted or blank.",
)
@limiter.limit(settings.rate_limit)
async def create_vehicle(
    request: Request,
    body: VehicleRequest,
    identity: Identity = Depends(get_current_identity),
    vehicles: VehicleService = Depends(get_vehicle_service),
):
    vehicle = await vehicles.create(identity, body.to_entity())
    return VehicleResponse.model_validate(vehicle)


@router.get(
    "/driver/{driver_id}",
    response_model=VehicleResponse,
    summary="Get the vehicle assigned to a driver",
)
@limiter.limit(settings.rate_limit)
async def get_vehicle_by_driver(
    request: Request,
    driver_id: int,
    identity: Identity = Depends(get_current_identity),
    vehicles: VehicleService = Depends(get_vehicle_service),
):
    vehicle = await vehicles.find_by_assigned_driver(identity, driver_id)
    return VehicleResponse.model_validate(vehicle)


@router.put(
    "/{vehicle_id}",
    response_model=VehicleResponse,
    summary="Replace a vehicle",
    description=(
        "Overwrites name, plate, type, model, status, capacity, fuel type and "
        "assigned driver.  Omitted optional fields are cleared."
    ),
)
@limiter.limit(settings.rate_limit)
async def replace_vehicle(
    request: Request,
    vehicle_id: int,
    body: VehicleRequest,
    identity: Identity = Depends(get_current_identity),
    vehicles: VehicleService = Depends(get_vehicle_service),
):
    vehicle = await vehicles.replace(identity, vehicle_id, body.to_entity())
    return VehicleResponse.model_validate(vehicle)


@router.delete("/{vehicle_id}", status_code=204, summary="Delete a vehicle")
@limiter.limit(settings.rate_limit)
async def delete_vehicle(
    request: Request,
    vehicle_id: int,
    identity: Identity = Depends(get_current_identity),
    vehicles: VehicleService = Depends(get_vehicle_service),
):
    await vehicles.delete(identity, vehicle_id)
    return Response(status_code=204)
