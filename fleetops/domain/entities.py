"""
Domain entities with business logic.

Patterns used
-------------
- ``Trip.set_status`` applies any status and binds COMPLETED to ``end_time``.
  The intended lifecycle lives in ``TRIP_TRANSITIONS`` but is not enforced.
- ``Vehicle.replace_from`` is the full-field overwrite used by updates; the
  replaceable fields are enumerated, never discovered by reflection.
- ``Identity`` is the verified caller passed explicitly into guarded calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .enums import (
    TRIP_TRANSITIONS,
    ApprovalDecision,
    ApprovalStatus,
    Role,
    TripStatus,
    VehicleStatus,
)


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Location:
    latitude: float = 0.0
    longitude: float = 0.0
    address: str = ""


@dataclass(frozen=True)
class Identity:
    """Identity summary bound into a session token."""

    id: int
    email: str
    name: str
    role: Role
    approval_status: ApprovalStatus

    @property
    def authority(self) -> str:
        return self.role.value

    @classmethod
    def from_user(cls, user: User) -> Identity:
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            approval_status=user.approval_status,
        )


# ── Entities ──────────────────────────────────────────────────────────


@dataclass
class User:
    id: Optional[int] = None
    email: str = ""
    password_hash: str = ""
    name: str = ""
    phone: Optional[str] = None
    license_number: Optional[str] = None
    role: Role = Role.CUSTOMER
    approval_status: ApprovalStatus = ApprovalStatus.APPROVED
    created_at: Optional[datetime] = None

    def apply_decision(self, decision: ApprovalDecision) -> None:
        """Last write wins; re-applying the same decision is a no-op."""
        self.approval_status = decision.resulting_status


VEHICLE_REPLACEABLE_FIELDS: tuple[str, ...] = (
    "name",
    "license_plate",
    "type",
    "model",
    "status",
    "capacity",
    "fuel_type",
    "assigned_driver_id",
)


@dataclass
class Vehicle:
    id: Optional[int] = None
    name: str = ""
    license_plate: str = ""
    type: Optional[str] = None
    model: Optional[str] = None
    status: Optional[VehicleStatus] = None
    capacity: Optional[int] = None
    fuel_type: Optional[str] = None
    last_service_date: Optional[datetime] = None
    next_service_due: Optional[datetime] = None
    assigned_driver_id: Optional[int] = None

    def apply_default_status(self) -> None:
        """New vehicles without a status start out AVAILABLE."""
        if not self.status:
            self.status = VehicleStatus.AVAILABLE

    def replace_from(self, other: Vehicle) -> None:
        """Overwrite every replaceable field, ``None`` values included.

        Service dates and the id are not part of the replace contract.
        """
        self.name = other.name
        self.license_plate = other.license_plate
        self.type = other.type
        self.model = other.model
        self.status = other.status
        self.capacity = other.capacity
        self.fuel_type = other.fuel_type
        self.assigned_driver_id = other.assigned_driver_id


@dataclass
class Trip:
    id: Optional[int] = None
    driver_id: Optional[int] = None
    vehicle_id: Optional[int] = None
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    status: TripStatus = TripStatus.PENDING
    pickup: Location = field(default_factory=Location)
    destination: Location = field(default_factory=Location)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    def start(self, at: datetime) -> None:
        """Reset to the creation state; caller-supplied times are discarded."""
        self.status = TripStatus.PENDING
        self.start_time = at
        self.end_time = None

    def follows_lifecycle(self, new_status: TripStatus) -> bool:
        return new_status in TRIP_TRANSITIONS.get(self.status, set())

    def set_status(self, new_status: TripStatus, at: datetime) -> None:
        """Apply *new_status* unconditionally.  COMPLETED stamps ``end_time``."""
        self.status = new_status
        if new_status == TripStatus.COMPLETED:
            self.end_time = at


@dataclass
class Booking:
    id: Optional[int] = None
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    vehicle_id: Optional[int] = None
    vehicle_type: Optional[str] = None
    pickup: Location = field(default_factory=Location)
    destination: Location = field(default_factory=Location)
    status: str = "PENDING"
    estimated_fare: Optional[float] = None
    estimated_duration: Optional[int] = None
    estimated_distance: Optional[float] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class FleetStats:
    total_vehicles: int
    active_vehicles: int
    vehicles_needing_service: int
    total_drivers: int
    active_drivers: int
    pending_approvals: int
