"""
Session issuance and validation.

``authenticate`` turns verified credentials into a signed, time-bounded JWT
that carries the caller's identity summary; ``validate`` turns such a token
back into an ``Identity`` without touching the store.  Expiry is only checked
when a token is validated.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

import pydantic
from jose import JWTError, jwt

from fleetops.config import settings
from fleetops.domain.clock import Clock, utc_now
from fleetops.domain.entities import Identity
from fleetops.domain.enums import ApprovalStatus, Role
from fleetops.domain.errors import AuthenticationFailure, InvalidToken
from fleetops.infrastructure.hashing import PasswordHasher, password_hasher
from fleetops.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


class TokenPayload(pydantic.BaseModel):
    """Claims embedded in every access token."""

    sub: str
    email: str
    name: str
    role: Role
    approval_status: ApprovalStatus
    exp: datetime
    iat: Optional[datetime] = None


class SessionIssuer:
    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher = password_hasher,
        *,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        expires_minutes: Optional[int] = None,
        clock: Clock = utc_now,
    ):
        self.users = users
        self.hasher = hasher
        self.secret_key = secret_key or settings.jwt_secret_key
        self.algorithm = algorithm or settings.jwt_algorithm
        if expires_minutes is None:
            expires_minutes = settings.access_token_expire_minutes
        self.expires = timedelta(minutes=expires_minutes)
        self.clock = clock

    async def authenticate(self, email: str, password: str) -> tuple[str, Identity]:
        """Verify credentials and issue a token.

        Unknown email and wrong password fail identically.
        """
        user = await self.users.get_by_email(email)
        if user is None:
            self.hasher.dummy_verify()
            verified = False
        else:
            verified = self.hasher.verify(password, user.password_hash)
        if not verified:
            logger.warning("Failed sign-in attempt")
            raise AuthenticationFailure()

        identity = Identity.from_user(user)
        return self.issue(identity), identity

    def issue(self, identity: Identity) -> str:
        now = self.clock()
        claims = {
            "sub": str(identity.id),
            "email": identity.email,
            "name": identity.name,
            "role": identity.authority,
            "approval_status": identity.approval_status.value,
            "iat": now,
            "exp": now + self.expires,
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def validate(self, token: str) -> Identity:
        """Decode *token*; raise ``InvalidToken`` if it is malformed, expired
        or was signed with a different key.

        Expiry is judged against ``self.clock``, the same clock that stamped
        the token.
        """
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
            payload = TokenPayload.model_validate(claims)
            user_id = int(payload.sub)
        except (JWTError, pydantic.ValidationError, ValueError) as exc:
            logger.warning("Rejected access token: %s", exc.__class__.__name__)
            raise InvalidToken() from exc

        if payload.exp <= self.clock():
            logger.warning("Rejected access token: expired")
            raise InvalidToken()

        return Identity(
            id=user_id,
            email=payload.email,
            name=payload.name,
            role=payload.role,
            approval_status=payload.approval_status,
        )
