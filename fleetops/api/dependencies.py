"""FastAPI dependency injection helpers."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from fleetops.domain.entities import Identity
from fleetops.domain.errors import InvalidToken
from fleetops.infrastructure.database import async_session_factory
from fleetops.infrastructure.repositories import (
    BookingRepository,
    TripRepository,
    UserRepository,
    VehicleRepository,
)
from fleetops.services.bookings import BookingService
from fleetops.services.registration import RegistrationService
from fleetops.services.sessions import SessionIssuer
from fleetops.services.stats import FleetStatsService
from fleetops.services.trips import TripService
from fleetops.services.vehicles import VehicleService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_session_issuer(db: AsyncSession = Depends(get_db)) -> SessionIssuer:
    return SessionIssuer(UserRepository(db))


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    issuer: SessionIssuer = Depends(get_session_issuer),
) -> Identity:
    """Resolve the verified caller from the bearer token."""
    if credentials is None:
        raise InvalidToken("Not authenticated")
    return issuer.validate(credentials.credentials)


def get_registration_service(db: AsyncSession = Depends(get_db)) -> RegistrationService:
    return RegistrationService(UserRepository(db))


def get_vehicle_service(db: AsyncSession = Depends(get_db)) -> VehicleService:
    return VehicleService(VehicleRepository(db))


def get_trip_service(db: AsyncSession = Depends(get_db)) -> TripService:
    return TripService(TripRepository(db))


def get_booking_service(db: AsyncSession = Depends(get_db)) -> BookingService:
    return BookingService(BookingRepository(db))


def get_stats_service(db: AsyncSession = Depends(get_db)) -> FleetStatsService:
    return FleetStatsService(UserRepository(db), VehicleRepository(db))
