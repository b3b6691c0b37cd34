"""Fleet dashboard aggregation.  Re-derived from the store on every call."""

from __future__ import annotations

from fleetops.domain.entities import FleetStats
from fleetops.domain.enums import ApprovalStatus, Role, VehicleStatus
from fleetops.infrastructure.repositories import UserRepository, VehicleRepository


class FleetStatsService:
    def __init__(self, users: UserRepository, vehicles: VehicleRepository):
        self.users = users
        self.vehicles = vehicles

    async def compute_stats(self) -> FleetStats:
        active_vehicles = await self.vehicles.count_by_status(VehicleStatus.IN_USE)
        return FleetStats(
            total_vehicles=await self.vehicles.count(),
            active_vehicles=active_vehicles,
            vehicles_needing_service=await self.vehicles.count_by_status(
                VehicleStatus.NEEDS_SERVICE
            ),
            total_drivers=await self.users.count_by_role(Role.DRIVER),
            # Simplification: one active driver per vehicle in use.
            active_drivers=active_vehicles,
            pending_approvals=await self.users.count_by_role_and_approval(
                Role.DRIVER, ApprovalStatus.PENDING
            ),
        )
