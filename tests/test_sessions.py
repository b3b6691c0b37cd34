"""Tests for credential checks and token issuance / validation."""

from __future__ import annotations

from datetime import timedelta

import pytest
from jose import jwt

from fleetops.domain.clock import utc_now
from fleetops.domain.enums import ApprovalStatus, Role
from fleetops.domain.errors import AuthenticationFailure, InvalidToken
from fleetops.infrastructure.hashing import PasswordHasher
from fleetops.infrastructure.repositories import UserRepository
from fleetops.services.registration import RegistrationService
from fleetops.services.sessions import SessionIssuer

SECRET = "test-secret"


async def _seed_user(db_session, email="user@example.com", role="CUSTOMER"):
    return await RegistrationService(UserRepository(db_session)).register(
        email=email, password="correct-horse", name="Pat User", role=role
    )


def _issuer(db_session, **kwargs) -> SessionIssuer:
    kwargs.setdefault("secret_key", SECRET)
    return SessionIssuer(UserRepository(db_session), **kwargs)


@pytest.mark.asyncio
async def test_authenticate_issues_valid_token(db_session):
    user = await _seed_user(db_session)
    issuer = _issuer(db_session)

    token, identity = await issuer.authenticate("user@example.com", "correct-horse")

    assert identity.id == user.id
    assert identity.authority == "CUSTOMER"
    assert identity.approval_status is ApprovalStatus.APPROVED
    assert issuer.validate(token) == identity


@pytest.mark.asyncio
async def test_pending_driver_can_sign_in(db_session):
    await _seed_user(db_session, "drv@example.com", "DRIVER")
    _, identity = await _issuer(db_session).authenticate("drv@example.com", "correct-horse")
    assert identity.role is Role.DRIVER
    assert identity.approval_status is ApprovalStatus.PENDING


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_email_fail_identically(db_session):
    await _seed_user(db_session)
    issuer = _issuer(db_session)

    with pytest.raises(AuthenticationFailure) as wrong_password:
        await issuer.authenticate("user@example.com", "nope")
    with pytest.raises(AuthenticationFailure) as unknown_email:
        await issuer.authenticate("ghost@example.com", "correct-horse")

    assert wrong_password.value.detail == unknown_email.value.detail
    assert wrong_password.value.status_code == unknown_email.value.status_code == 401


@pytest.mark.asyncio
async def test_token_valid_when_issued_on_a_fixed_clock(db_session, clock):
    await _seed_user(db_session)
    issuer = _issuer(db_session, expires_minutes=60, clock=clock)

    token, identity = await issuer.authenticate("user@example.com", "correct-horse")
    assert issuer.validate(token) == identity


@pytest.mark.asyncio
async def test_token_expires_on_the_issuing_clock(db_session, clock):
    await _seed_user(db_session)
    issuer = _issuer(db_session, expires_minutes=60, clock=clock)
    token, identity = await issuer.authenticate("user@example.com", "correct-horse")

    clock.advance(minutes=59, seconds=59)
    assert issuer.validate(token) == identity

    clock.advance(seconds=1)
    with pytest.raises(InvalidToken):
        issuer.validate(token)


@pytest.mark.asyncio
async def test_zero_lifetime_is_honoured(db_session, clock):
    await _seed_user(db_session)
    issuer = _issuer(db_session, expires_minutes=0, clock=clock)
    token, _ = await issuer.authenticate("user@example.com", "correct-horse")

    with pytest.raises(InvalidToken):
        issuer.validate(token)


class CountingHasher(PasswordHasher):
    def __init__(self):
        super().__init__()
        self.checks = 0

    def verify(self, plaintext: str, digest: str) -> bool:
        self.checks += 1
        return super().verify(plaintext, digest)

    def dummy_verify(self) -> bool:
        self.checks += 1
        return super().dummy_verify()


@pytest.mark.asyncio
async def test_unknown_email_costs_one_hash_check(db_session):
    await _seed_user(db_session)

    wrong_password = CountingHasher()
    with pytest.raises(AuthenticationFailure):
        await _issuer(db_session, hasher=wrong_password).authenticate(
            "user@example.com", "nope"
        )

    unknown_email = CountingHasher()
    with pytest.raises(AuthenticationFailure):
        await _issuer(db_session, hasher=unknown_email).authenticate(
            "ghost@example.com", "nope"
        )

    assert wrong_password.checks == unknown_email.checks == 1


@pytest.mark.asyncio
async def test_token_signed_with_other_key_rejected(db_session):
    await _seed_user(db_session)
    token, _ = await _issuer(db_session, secret_key="other-key").authenticate(
        "user@example.com", "correct-horse"
    )
    with pytest.raises(InvalidToken):
        _issuer(db_session).validate(token)


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
def test_malformed_token_rejected(token):
    issuer = SessionIssuer(users=None, secret_key=SECRET)
    with pytest.raises(InvalidToken):
        issuer.validate(token)


def test_token_missing_identity_claims_rejected():
    token = jwt.encode(
        {"sub": "1", "exp": utc_now() + timedelta(minutes=5)}, SECRET, algorithm="HS256"
    )
    issuer = SessionIssuer(users=None, secret_key=SECRET)
    with pytest.raises(InvalidToken):
        issuer.validate(token)


def test_token_with_unknown_role_rejected():
    token = jwt.encode(
        {
            "sub": "1",
            "email": "x@example.com",
            "name": "X",
            "role": "ROOT",
            "approval_status": "APPROVED",
            "exp": utc_now() + timedelta(minutes=5),
        },
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(InvalidToken):
        SessionIssuer(users=None, secret_key=SECRET).validate(token)


def test_expired_token_rejected_on_default_clock():
    token = jwt.encode(
        {
            "sub": "1",
            "email": "x@example.com",
            "name": "X",
            "role": "CUSTOMER",
            "approval_status": "APPROVED",
            "exp": utc_now() - timedelta(minutes=1),
        },
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(InvalidToken):
        SessionIssuer(users=None, secret_key=SECRET).validate(token)
