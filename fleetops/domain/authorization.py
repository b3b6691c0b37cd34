"""
Role-based authorization.

Each guarded operation maps to the set of roles allowed to run it.  Holding
any one of the roles is enough.  Operations that are not listed here (vehicle
listing, trips, bookings, dashboard) are intentionally open.
"""

from __future__ import annotations

import enum
import logging

from .entities import Identity
from .enums import Role
from .errors import AuthorizationFailure

logger = logging.getLogger(__name__)


class Operation(str, enum.Enum):
    LIST_ALL_USERS = "list-all-users"
    APPROVE_DRIVER = "approve-driver"
    REJECT_DRIVER = "reject-driver"
    CREATE_VEHICLE = "create-vehicle"
    UPDATE_VEHICLE = "update-vehicle"
    DELETE_VEHICLE = "delete-vehicle"
    GET_VEHICLE_BY_DRIVER = "get-vehicle-by-driver"


REQUIRED_ROLES: dict[Operation, frozenset[Role]] = {
    Operation.LIST_ALL_USERS: frozenset({Role.ADMIN}),
    Operation.APPROVE_DRIVER: frozenset({Role.ADMIN}),
    Operation.REJECT_DRIVER: frozenset({Role.ADMIN}),
    Operation.DELETE_VEHICLE: frozenset({Role.ADMIN}),
    Operation.CREATE_VEHICLE: frozenset({Role.ADMIN, Role.FLEET_MANAGER}),
    Operation.UPDATE_VEHICLE: frozenset({Role.ADMIN, Role.FLEET_MANAGER}),
    Operation.GET_VEHICLE_BY_DRIVER: frozenset({Role.DRIVER, Role.ADMIN}),
}


def authorize(role: Role, operation: Operation) -> bool:
    """Return True if *role* may run *operation*."""
    return role in REQUIRED_ROLES[operation]


def require(identity: Identity, operation: Operation) -> None:
    """Raise ``AuthorizationFailure`` unless *identity* may run *operation*."""
    if not authorize(identity.role, operation):
        logger.warning(
            "Denied %s for user %s (role=%s)",
            operation.value,
            identity.id,
            identity.authority,
        )
        raise AuthorizationFailure(
            f"Role {identity.authority} is not allowed to {operation.value}"
        )
