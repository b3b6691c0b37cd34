"""
Vehicle lifecycle.

Creation fills in AVAILABLE when no status is given.  Updates are full
replacements of the enumerated fields in ``Vehicle.replace_from``; any status
may follow any other (no transition checks).
"""

from __future__ import annotations

import logging

from fleetops.domain.authorization import Operation, require
from fleetops.domain.entities import Identity, Vehicle
from fleetops.domain.errors import NotFoundError
from fleetops.infrastructure.repositories import VehicleRepository

logger = logging.getLogger(__name__)


class VehicleService:
    def __init__(self, vehicles: VehicleRepository):
        self.vehicles = vehicles

    async def list_all(self) -> list[Vehicle]:
        return await self.vehicles.list_all()

    async def create(self, actor: Identity, draft: Vehicle) -> Vehicle:
        require(actor, Operation.CREATE_VEHICLE)
        draft.id = None
        draft.apply_default_status()
        vehicle = await self.vehicles.save(draft)
        logger.info(
            "Vehicle %s (%s) created with status %s",
            vehicle.id,
            vehicle.license_plate,
            vehicle.status.value,
        )
        return vehicle

    async def replace(self, actor: Identity, vehicle_id: int, draft: Vehicle) -> Vehicle:
        require(actor, Operation.UPDATE_VEHICLE)
        vehicle = await self._get(vehicle_id)
        vehicle.replace_from(draft)
        vehicle = await self.vehicles.save(vehicle)
        logger.info(
            "Vehicle %s replaced (status=%s, driver=%s)",
            vehicle_id,
            vehicle.status.value if vehicle.status else None,
            vehicle.assigned_driver_id,
        )
        return vehicle

    async def find_by_assigned_driver(self, actor: Identity, driver_id: int) -> Vehicle:
        require(actor, Operation.GET_VEHICLE_BY_DRIVER)
        vehicle = await self.vehicles.find_by_assigned_driver(driver_id)
        if vehicle is None:
            raise NotFoundError(f"No vehicle assigned to driver {driver_id}")
        return vehicle

    async def delete(self, actor: Identity, vehicle_id: int) -> None:
        require(actor, Operation.DELETE_VEHICLE)
        if not await self.vehicles.delete(vehicle_id):
            raise NotFoundError(f"Vehicle {vehicle_id} not found")
        logger.info("Vehicle %s deleted by %s", vehicle_id, actor.id)

    async def _get(self, vehicle_id: int) -> Vehicle:
        vehicle = await self.vehicles.get_by_id(vehicle_id)
        if vehicle is None:
            raise NotFoundError(f"Vehicle {vehicle_id} not found")
        return vehicle
