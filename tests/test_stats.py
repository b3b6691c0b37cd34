"""Dashboard aggregation against a seeded store."""

import pytest

from fleetops.domain.entities import User, Vehicle
from fleetops.domain.enums import ApprovalStatus, Role, VehicleStatus
from fleetops.infrastructure.repositories import UserRepository, VehicleRepository
from fleetops.services.stats import FleetStatsService


async def _seed(db_session):
    vehicles = VehicleRepository(db_session)
    for i, status in enumerate(
        [
            VehicleStatus.IN_USE,
            VehicleStatus.NEEDS_SERVICE,
            VehicleStatus.AVAILABLE,
            VehicleStatus.AVAILABLE,
        ]
    ):
        await vehicles.save(Vehicle(name=f"V{i}", license_plate=f"P-{i}", status=status))

    users = UserRepository(db_session)
    for email, role, approval in [
        ("d1@example.com", Role.DRIVER, ApprovalStatus.PENDING),
        ("d2@example.com", Role.DRIVER, ApprovalStatus.APPROVED),
        ("c@example.com", Role.CUSTOMER, ApprovalStatus.APPROVED),
        ("a@example.com", Role.ADMIN, ApprovalStatus.APPROVED),
    ]:
        await users.save(
            User(email=email, password_hash="x", name=email, role=role, approval_status=approval)
        )


@pytest.mark.asyncio
async def test_compute_stats(db_session):
    await _seed(db_session)
    stats = await FleetStatsService(
        UserRepository(db_session), VehicleRepository(db_session)
    ).compute_stats()

    assert stats.total_vehicles == 4
    assert stats.active_vehicles == 1
    assert stats.vehicles_needing_service == 1
    assert stats.total_drivers == 2
    assert stats.pending_approvals == 1
    assert stats.active_drivers == 1


@pytest.mark.asyncio
async def test_stats_reflect_current_state(db_session):
    await _seed(db_session)
    service = FleetStatsService(UserRepository(db_session), VehicleRepository(db_session))
    before = await service.compute_stats()

    vehicles = VehicleRepository(db_session)
    spare = (await vehicles.list_all())[-1]
    spare.status = VehicleStatus.IN_USE
    await vehicles.save(spare)

    after = await service.compute_stats()
    assert before.active_vehicles == 1
    assert after.active_vehicles == after.active_drivers == 2


@pytest.mark.asyncio
async def test_empty_store(db_session):
    stats = await FleetStatsService(
        UserRepository(db_session), VehicleRepository(db_session)
    ).compute_stats()
    assert stats.total_vehicles == stats.total_drivers == stats.pending_approvals == 0
