"""
User administration endpoints (ADMIN only)
==========================================

GET /api/users               -- list every user
PUT /api/users/{id}/approve  -- approve a (driver) account
PUT /api/users/{id}/reject   -- reject a (driver) account
"""

from fastapi import APIRouter, Depends, Request

from fleetops.api.dependencies import get_current_identity, get_registration_service
from fleetops.api.middleware import limiter
from fleetops.api.schemas import UserResponse
from fleetops.config import settings
from fleetops.domain.entities import Identity
from fleetops.domain.enums import ApprovalDecision
from fleetops.services.registration import RegistrationService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserResponse], summary="List all users")
@limiter.limit(settings.rate_limit)
async def list_users(
    request: Request,
    identity: Identity = Depends(get_current_identity),
    registration: RegistrationService = Depends(get_registration_service),
):
    users = await registration.list_users(identity)
    return [UserResponse.model_validate(u) for u in users]


@router.put("/{user_id}/approve", response_model=UserResponse, summary="Approve a user")
@limiter.limit(settings.rate_limit)
async def approve_user(
    request: Request,
    user_id: int,
    identity: Identity = Depends(get_current_identity),
    registration: RegistrationService = Depends(get_registration_service),
):
    user = await registration.decide(identity, user_id, ApprovalDecision.APPROVE)
    return UserResponse.model_validate(user)


@router.put("/{user_id}/reject", response_model=UserResponse, summary="Reject a user")
@limiter.limit(settings.rate_limit)
async def reject_user(
    request: Request,
    user_id: int,
    identity: Identity = Depends(get_current_identity),
    registration: RegistrationService = Depends(get_registration_service),
):
    user = await registration.decide(identity, user_id, ApprovalDecision.REJECT)
    return UserResponse.model_validate(user)
