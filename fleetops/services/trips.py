"""
Trip lifecycle.

Intended flow: PENDING -> IN_PROGRESS -> COMPLETED, or CANCELLED from any
non-terminal state.  ``set_status`` does not enforce it; a status outside the
flow is applied anyway and logged.  The enforced side effects are:

* ``start_time`` is stamped with the clock at creation,
* ``end_time`` is stamped with the clock whenever the status becomes COMPLETED.
"""

from __future__ import annotations

import logging
from typing import Optional

from fleetops.domain.clock import Clock, utc_now
from fleetops.domain.entities import Trip
from fleetops.domain.enums import ACTIVE_TRIP_PRECEDENCE, TripStatus
from fleetops.domain.errors import NotFoundError
from fleetops.infrastructure.repositories import TripRepository

logger = logging.getLogger(__name__)


class TripService:
    def __init__(self, trips: TripRepository, clock: Clock = utc_now):
        self.trips = trips
        self.clock = clock

    async def create(self, draft: Trip) -> Trip:
        draft.id = None
        draft.start(self.clock())
        trip = await self.trips.save(draft)
        logger.info(
            "Trip %s created (driver=%s, customer=%s)",
            trip.id,
            trip.driver_id,
            trip.customer_id,
        )
        return trip

    async def get(self, trip_id: int) -> Trip:
        trip = await self.trips.get_by_id(trip_id)
        if trip is None:
            raise NotFoundError(f"Trip {trip_id} not found")
        return trip

    async def set_status(self, trip_id: int, status: TripStatus) -> Trip:
        trip = await self.get(trip_id)
        if not trip.follows_lifecycle(status):
            logger.warning(
                "Trip %s moved %s -> %s outside the usual lifecycle",
                trip_id,
                trip.status.value,
                status.value,
            )
        trip.set_status(status, self.clock())
        trip = await self.trips.save(trip)
        logger.info("Trip %s is now %s", trip_id, trip.status.value)
        return trip

    async def active_for_driver(self, driver_id: int) -> Optional[Trip]:
        """IN_PROGRESS beats PENDING; ``None`` when the driver has neither."""
        for status in ACTIVE_TRIP_PRECEDENCE:
            trip = await self.trips.find_by_driver_and_status(driver_id, status)
            if trip is not None:
                return trip
        return None

    async def for_driver(self, driver_id: int) -> list[Trip]:
        return await self.trips.list_by_driver(driver_id)

    async def for_customer(self, customer_id: int) -> list[Trip]:
        return await self.trips.list_by_customer(customer_id)
