"""
FastAPI application factory.

* Registers routes for auth, users, vehicles, trips, bookings and dashboard.
* Maps domain errors to HTTP responses.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from fleetops.api.middleware import limiter
from fleetops.api.routes import auth, bookings, dashboard, trips, users, vehicles
from fleetops.config import settings
from fleetops.domain.errors import FleetError
from fleetops.infrastructure.database import engine

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release pooled DB connections on shutdown."""
    logger.info("Fleet operations API starting")
    yield
    await engine.dispose()
    logger.info("Fleet operations API stopped")


async def fleet_error_handler(request: Request, exc: FleetError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Fleet Operations API",
        description=(
            "Tracks vehicles, drivers, trips and bookings.  Drivers are "
            "gated by admin approval and every guarded operation is checked "
            "against the caller's role."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Domain errors (400 / 401 / 403 / 404)
    app.add_exception_handler(FleetError, fleet_error_handler)

    # Routers
    for module in (auth, users, vehicles, trips, bookings, dashboard):
        app.include_router(module.router, prefix="/api")

    return app
