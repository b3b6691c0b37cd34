"""
Dashboard / observability endpoints
===================================

GET /api/dashboard/stats -- fleet summary counters
GET /api/health          -- simple health check
"""

from fastapi import APIRouter, Depends, Request

from fleetops.api.dependencies import get_stats_service
from fleetops.api.middleware import limiter
from fleetops.api.schemas import DashboardStatsResponse, HealthResponse
from fleetops.config import settings
from fleetops.services.stats import FleetStatsService

router = APIRouter(tags=["dashboard"])


@router.get(
    "/dashboard/stats",
    response_model=DashboardStatsResponse,
    summary="Fleet summary statistics",
    description=(
        "Point-in-time counts.  ``active_drivers`` mirrors ``active_vehicles``."
    ),
)
@limiter.limit(settings.rate_limit)
async def get_stats(
    request: Request,
    stats: FleetStatsService = Depends(get_stats_service),
):
    return DashboardStatsResponse.model_validate(await stats.compute_stats())


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse()
