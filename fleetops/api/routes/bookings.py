"""
Booking endpoints
=================

GET  /api/bookings                     -- list all bookings
POST /api/bookings                     -- store a booking
GET  /api/bookings/customer/{id}       -- bookings of one customer
"""

from fastapi import APIRouter, Depends, Request

from fleetops.api.dependencies import get_booking_service
from fleetops.api.middleware import limiter
from fleetops.api.schemas import BookingRequest, BookingResponse
from fleetops.config import settings
from fleetops.services.bookings import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("", response_model=list[BookingResponse], summary="List all bookings")
@limiter.limit(settings.rate_limit)
async def list_bookings(
    request: Request,
    bookings: BookingService = Depends(get_booking_service),
):
    return [BookingResponse.model_validate(b) for b in await bookings.list_all()]


@router.post("", status_code=201, response_model=BookingResponse, summary="Create a booking")
@limiter.limit(settings.rate_limit)
async def create_booking(
    request: Request,
    body: BookingRequest,
    bookings: BookingService = Depends(get_booking_service),
):
    booking = await bookings.create(body.to_entity())
    return BookingResponse.model_validate(booking)


@router.get(
    "/customer/{customer_id}",
    response_model=list[BookingResponse],
    summary="List a customer's bookings",
)
@limiter.limit(settings.rate_limit)
async def get_customer_bookings(
    request: Request,
    customer_id: int,
    bookings: BookingService = Depends(get_booking_service),
):
    return [
        BookingResponse.model_validate(b)
        for b in await bookings.for_customer(customer_id)
    ]
