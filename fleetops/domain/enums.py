"""Domain enumerations and state-transition rules."""

from __future__ import annotations

import enum

from .errors import ValidationError


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    FLEET_MANAGER = "FLEET_MANAGER"
    DRIVER = "DRIVER"
    CUSTOMER = "CUSTOMER"


class ApprovalStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ApprovalDecision(str, enum.Enum):
    APPROVE = "APPROVE"
    REJECT = "REJECT"

    @property
    def resulting_status(self) -> ApprovalStatus:
        if self is ApprovalDecision.APPROVE:
            return ApprovalStatus.APPROVED
        return ApprovalStatus.REJECTED


class VehicleStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    IN_USE = "IN_USE"
    NEEDS_SERVICE = "NEEDS_SERVICE"
    OFFLINE = "OFFLINE"


class TripStatus(str, enum.Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# Intended trip lifecycle.  Not enforced by ``Trip.set_status``; only used to
# flag out-of-lifecycle updates in the logs.
TRIP_TRANSITIONS: dict[TripStatus, set[TripStatus]] = {
    TripStatus.PENDING: {TripStatus.IN_PROGRESS, TripStatus.CANCELLED},
    TripStatus.IN_PROGRESS: {TripStatus.COMPLETED, TripStatus.CANCELLED},
    TripStatus.COMPLETED: set(),
    TripStatus.CANCELLED: set(),
}

# Precedence used when resolving a driver's active trip.
ACTIVE_TRIP_PRECEDENCE: tuple[TripStatus, ...] = (
    TripStatus.IN_PROGRESS,
    TripStatus.PENDING,
)


def parse_role(raw: str | None) -> Role:
    """Normalise a user-supplied role string ("fleet manager" -> FLEET_MANAGER).

    Anything that does not match a known role after normalisation is rejected;
    no fuzzy guessing.
    """
    if raw is None:
        raise ValidationError("Invalid role provided")
    try:
        return Role(raw.upper().replace(" ", "_"))
    except ValueError:
        raise ValidationError("Invalid role provided") from None


def initial_approval_status(role: Role) -> ApprovalStatus:
    """Drivers wait for an admin; every other role is approved on signup."""
    if role is Role.DRIVER:
        return ApprovalStatus.PENDING
    return ApprovalStatus.APPROVED
