"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work), exposes
domain-relevant queries only, and speaks in domain entities: ORM rows never
leave this module.  ``save`` inserts when the entity has no id (and assigns
one), otherwise it overwrites the stored row.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import BookingModel, TripModel, UserModel, VehicleModel
from fleetops.domain.entities import Booking, Location, Trip, User, Vehicle
from fleetops.domain.enums import ApprovalStatus, Role, TripStatus, VehicleStatus


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists_by_email(self, email: str) -> bool:
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.email == email).limit(1)
        )
        return result.first() is not None

    async def get_by_id(self, user_id: int) -> Optional[User]:
        row = await self.session.get(UserModel, user_id)
        return _user_entity(row) if row else None

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        row = result.scalar_one_or_none()
        return _user_entity(row) if row else None

    async def list_all(self) -> list[User]:
        result = await self.session.execute(select(UserModel).order_by(UserModel.id))
        return [_user_entity(r) for r in result.scalars().all()]

    async def save(self, user: User) -> User:
        row = await self.session.get(UserModel, user.id) if user.id else None
        if row is None:
            row = UserModel()
            self.session.add(row)
        row.email = user.email
        row.password_hash = user.password_hash
        row.name = user.name
        row.phone = user.phone
        row.license_number = user.license_number
        row.role = user.role
        row.approval_status = user.approval_status
        await self.session.flush()
        user.id = row.id
        user.created_at = _aware(row.created_at)
        return user

    async def count_by_role(self, role: Role) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(UserModel).where(UserModel.role == role)
        )
        return result.scalar() or 0

    async def count_by_role_and_approval(
        self, role: Role, approval_status: ApprovalStatus
    ) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(UserModel)
            .where(
                UserModel.role == role,
                UserModel.approval_status == approval_status,
            )
        )
        return result.scalar() or 0


class VehicleRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> list[Vehicle]:
        result = await self.session.execute(
            select(VehicleModel).order_by(VehicleModel.id)
        )
        return [_vehicle_entity(r) for r in result.scalars().all()]

    async def get_by_id(self, vehicle_id: int) -> Optional[Vehicle]:
        row = await self.session.get(VehicleModel, vehicle_id)
        return _vehicle_entity(row) if row else None

    async def find_by_assigned_driver(self, driver_id: int) -> Optional[Vehicle]:
        """Nothing stops two vehicles sharing a driver; the newest one wins."""
        result = await self.session.execute(
            select(VehicleModel)
            .where(VehicleModel.assigned_driver_id == driver_id)
            .order_by(VehicleModel.id.desc())
            .limit(1)
        )
        row = result.scalar_one_or_none()
        return _vehicle_entity(row) if row else None

    async def save(self, vehicle: Vehicle) -> Vehicle:
        row = await self.session.get(VehicleModel, vehicle.id) if vehicle.id else None
        if row is None:
            row = VehicleModel()
            self.session.add(row)
        row.name = vehicle.name
        row.license_plate = vehicle.license_plate
        row.type = vehicle.type
        row.model = vehicle.model
        row.status = vehicle.status
        row.capacity = vehicle.capacity
        row.fuel_type = vehicle.fuel_type
        row.last_service_date = vehicle.last_service_date
        row.next_service_due = vehicle.next_service_due
        row.assigned_driver_id = vehicle.assigned_driver_id
        await self.session.flush()
        vehicle.id = row.id
        return vehicle

    async def delete(self, vehicle_id: int) -> bool:
        row = await self.session.get(VehicleModel, vehicle_id)
        if row is None:
            return False
        await self.session.delete(row)
        await self.session.flush()
        return True

    async def count(self) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(VehicleModel)
        )
        return result.scalar() or 0

    async def count_by_status(self, status: VehicleStatus) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(VehicleModel)
            .where(VehicleModel.status == status)
        )
        return result.scalar() or 0


class TripRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, trip_id: int) -> Optional[Trip]:
        row = await self.session.get(TripModel, trip_id)
        return _trip_entity(row) if row else None

    async def find_by_driver_and_status(
        self, driver_id: int, status: TripStatus
    ) -> Optional[Trip]:
        result = await self.session.execute(
            select(TripModel)
            .where(TripModel.driver_id == driver_id, TripModel.status == status)
            .order_by(TripModel.id.desc())
            .limit(1)
        )
        row = result.scalar_one_or_none()
        return _trip_entity(row) if row else None

    async def list_by_driver(self, driver_id: int) -> list[Trip]:
        result = await self.session.execute(
            select(TripModel)
            .where(TripModel.driver_id == driver_id)
            .order_by(TripModel.id)
        )
        return [_trip_entity(r) for r in result.scalars().all()]

    async def list_by_customer(self, customer_id: int) -> list[Trip]:
        result = await self.session.execute(
            select(TripModel)
            .where(TripModel.customer_id == customer_id)
            .order_by(TripModel.id)
        )
        return [_trip_entity(r) for r in result.scalars().all()]

    async def save(self, trip: Trip) -> Trip:
        row = await self.session.get(TripModel, trip.id) if trip.id else None
        if row is None:
            row = TripModel()
            self.session.add(row)
        row.driver_id = trip.driver_id
        row.vehicle_id = trip.vehicle_id
        row.customer_id = trip.customer_id
        row.customer_name = trip.customer_name
        row.status = trip.status
        row.pickup_lat = trip.pickup.latitude
        row.pickup_lng = trip.pickup.longitude
        row.pickup_address = trip.pickup.address
        row.dest_lat = trip.destination.latitude
        row.dest_lng = trip.destination.longitude
        row.dest_address = trip.destination.address
        row.start_time = trip.start_time
        row.end_time = trip.end_time
        await self.session.flush()
        trip.id = row.id
        return trip


class BookingRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> list[Booking]:
        result = await self.session.execute(
            select(BookingModel).order_by(BookingModel.id)
        )
        return [_booking_entity(r) for r in result.scalars().all()]

    async def list_by_customer(self, customer_id: int) -> list[Booking]:
        result = await self.session.execute(
            select(BookingModel)
            .where(BookingModel.customer_id == customer_id)
            .order_by(BookingModel.id)
        )
        return [_booking_entity(r) for r in result.scalars().all()]

    async def save(self, booking: Booking) -> Booking:
        row = BookingModel(
            customer_id=booking.customer_id,
            customer_name=booking.customer_name,
            vehicle_id=booking.vehicle_id,
            vehicle_type=booking.vehicle_type,
            pickup_lat=booking.pickup.latitude,
            pickup_lng=booking.pickup.longitude,
            pickup_address=booking.pickup.address,
            dest_lat=booking.destination.latitude,
            dest_lng=booking.destination.longitude,
            dest_address=booking.destination.address,
            status=booking.status,
            estimated_fare=booking.estimated_fare,
            estimated_duration=booking.estimated_duration,
            estimated_distance=booking.estimated_distance,
        )
        self.session.add(row)
        await self.session.flush()
        booking.id = row.id
        booking.created_at = _aware(row.created_at)
        return booking


# ── Row -> entity mapping ─────────────────────────────────────────────


def _user_entity(row: UserModel) -> User:
    return User(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        name=row.name,
        phone=row.phone,
        license_number=row.license_number,
        role=Role(row.role),
        approval_status=ApprovalStatus(row.approval_status),
        created_at=_aware(row.created_at),
    )


def _vehicle_entity(row: VehicleModel) -> Vehicle:
    return Vehicle(
        id=row.id,
        name=row.name,
        license_plate=row.license_plate,
        type=row.type,
        model=row.model,
        status=VehicleStatus(row.status) if row.status else None,
        capacity=row.capacity,
        fuel_type=row.fuel_type,
        last_service_date=_aware(row.last_service_date),
        next_service_due=_aware(row.next_service_due),
        assigned_driver_id=row.assigned_driver_id,
    )


def _trip_entity(row: TripModel) -> Trip:
    return Trip(
        id=row.id,
        driver_id=row.driver_id,
        vehicle_id=row.vehicle_id,
        customer_id=row.customer_id,
        customer_name=row.customer_name,
        status=TripStatus(row.status),
        pickup=Location(row.pickup_lat or 0.0, row.pickup_lng or 0.0, row.pickup_address or ""),
        destination=Location(row.dest_lat or 0.0, row.dest_lng or 0.0, row.dest_address or ""),
        start_time=_aware(row.start_time),
        end_time=_aware(row.end_time),
    )


def _booking_entity(row: BookingModel) -> Booking:
    return Booking(
        id=row.id,
        customer_id=row.customer_id,
        customer_name=row.customer_name,
        vehicle_id=row.vehicle_id,
        vehicle_type=row.vehicle_type,
        pickup=Location(row.pickup_lat or 0.0, row.pickup_lng or 0.0, row.pickup_address or ""),
        destination=Location(row.dest_lat or 0.0, row.dest_lng or 0.0, row.dest_address or ""),
        status=row.status,
        estimated_fare=row.estimated_fare,
        estimated_duration=row.estimated_duration,
        estimated_distance=row.estimated_distance,
        created_at=_aware(row.created_at),
    )


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    """Stores without timezone support (SQLite) hand back naive UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
