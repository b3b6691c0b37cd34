"""
Seed script -- populates the database with demo data for reviewers.

Run with:
    python seed.py

Creates (idempotently):
  - the schema, if the tables do not exist yet
  - 4 demo vehicles, only when the vehicle table is empty
  - one approved demo account per role, skipped when its email exists
"""

import asyncio

from fleetops.domain.entities import User, Vehicle
from fleetops.domain.enums import ApprovalStatus, Role, VehicleStatus
from fleetops.infrastructure.database import Base, async_session_factory, engine
from fleetops.infrastructure.hashing import password_hasher
from fleetops.infrastructure.repositories import UserRepository, VehicleRepository
import fleetops.infrastructure.models  # noqa: F401  (registers tables)


VEHICLES = [
    {"name": "Swift Dzire #001", "license_plate": "KA-01-AB-1234", "type": "CAR", "status": VehicleStatus.AVAILABLE},
    {"name": "Innova Crysta #002", "license_plate": "KA-01-CD-5678", "type": "VAN", "status": VehicleStatus.IN_USE},
    {"name": "Ather 450X #003", "license_plate": "KA-01-EF-9012", "type": "BIKE", "status": VehicleStatus.AVAILABLE},
    {"name": "Bajaj RE #004", "license_plate": "KA-01-GH-3456", "type": "AUTO", "status": VehicleStatus.NEEDS_SERVICE},
]

USERS = [
    {"email": "admin@neurofleetx.com", "password": "admin123", "name": "Alex Administrator", "role": Role.ADMIN, "phone": "+1 555-0100"},
    {"email": "manager@neurofleetx.com", "password": "manager123", "name": "Morgan Fleet", "role": Role.FLEET_MANAGER, "phone": "+1 555-0101"},
    {"email": "driver@neurofleetx.com", "password": "driver123", "name": "Derek Driver", "role": Role.DRIVER, "phone": "+1 555-0102", "license_number": "DL-2024-001"},
    {"email": "customer@neurofleetx.com", "password": "customer123", "name": "Casey Customer", "role": Role.CUSTOMER, "phone": "+1 555-0103"},
]


async def seed():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        vehicle_repo = VehicleRepository(session)
        user_repo = UserRepository(session)

        # ── Vehicles ──────────────────────────────────────────────────
        if await vehicle_repo.count() == 0:
            for v in VEHICLES:
                await vehicle_repo.save(Vehicle(**v))
            print(f"  Created {len(VEHICLES)} vehicles")
        else:
            print("  Vehicles already present. Skipping.")

        # ── Users ─────────────────────────────────────────────────────
        # Demo accounts bypass signup, so the seeded driver is pre-approved.
        created = 0
        for u in USERS:
            if await user_repo.exists_by_email(u["email"]):
                continue
            await user_repo.save(
                User(
                    email=u["email"],
                    password_hash=password_hasher.hash(u["password"]),
                    name=u["name"],
                    phone=u["phone"],
                    license_number=u.get("license_number"),
                    role=u["role"],
                    approval_status=ApprovalStatus.APPROVED,
                )
            )
            created += 1
        print(f"  Created {created} demo users")

        await session.commit()

    await engine.dispose()
    print("Demo users and vehicles initialized!")


if __name__ == "__main__":
    asyncio.run(seed())
