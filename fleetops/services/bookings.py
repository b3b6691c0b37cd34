"""Booking records: stored and listed as-is, no lifecycle rules."""

from __future__ import annotations

from fleetops.domain.entities import Booking
from fleetops.infrastructure.repositories import BookingRepository


class BookingService:
    def __init__(self, bookings: BookingRepository):
        self.bookings = bookings

    async def list_all(self) -> list[Booking]:
        return await self.bookings.list_all()

    async def create(self, draft: Booking) -> Booking:
        draft.id = None
        return await self.bookings.save(draft)

    async def for_customer(self, customer_id: int) -> list[Booking]:
        return await self.bookings.list_by_customer(customer_id)
