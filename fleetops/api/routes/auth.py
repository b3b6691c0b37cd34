"""
Auth endpoints
==============

POST /api/auth/signup -- register a user (drivers start PENDING approval)
POST /api/auth/signin -- exchange credentials for a bearer token
"""

from fastapi import APIRouter, Depends, Request

from fleetops.api.dependencies import get_registration_service, get_session_issuer
from fleetops.api.middleware import limiter
from fleetops.api.schemas import (
    ErrorResponse,
    JwtResponse,
    SigninRequest,
    SignupRequest,
    UserResponse,
)
from fleetops.config import settings
from fleetops.services.registration import RegistrationService
from fleetops.services.sessions import SessionIssuer

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup",
    status_code=201,
    response_model=UserResponse,
    summary="Register a new user",
    responses={400: {"model": ErrorResponse, "description": "Email taken or role invalid"}},
)
@limiter.limit(settings.auth_rate_limit)
async def signup(
    request: Request,
    body: SignupRequest,
    registration: RegistrationService = Depends(get_registration_service),
):
    user = await registration.register(
        email=body.email,
        password=body.password,
        name=body.name,
        phone=body.phone,
        license_number=body.license_number,
        role=body.role,
    )
    return UserResponse.model_validate(user)


@router.post(
    "/signin",
    response_model=JwtResponse,
    summary="Sign in and obtain an access token",
    responses={401: {"model": ErrorResponse}},
)
@limiter.limit(settings.auth_rate_limit)
async def signin(
    request: Request,
    body: SigninRequest,
    issuer: SessionIssuer = Depends(get_session_issuer),
):
    token, identity = await issuer.authenticate(body.email, body.password)
    return JwtResponse(
        token=token,
        id=identity.id,
        email=identity.email,
        name=identity.name,
        roles=[identity.authority],
        approval_status=identity.approval_status,
    )
