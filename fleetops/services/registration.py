"""
Registration & approval workflow.

Signup rules
------------
1. Email must be unused (checked up front, and the unique constraint is the
   backstop for concurrent signups).
2. The requested role is normalised (upper-case, spaces -> ``_``) and must
   then match a known role exactly.
3. Passwords are hashed before they reach the store.
4. Drivers start PENDING and wait for an admin; everyone else is APPROVED.

Approval decisions are admin-only, idempotent, and last-write-wins.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from fleetops.domain.authorization import Operation, require
from fleetops.domain.entities import Identity, User
from fleetops.domain.enums import (
    ApprovalDecision,
    initial_approval_status,
    parse_role,
)
from fleetops.domain.errors import DuplicateError, NotFoundError
from fleetops.infrastructure.hashing import PasswordHasher, password_hasher
from fleetops.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)

_DECISION_OPERATIONS = {
    ApprovalDecision.APPROVE: Operation.APPROVE_DRIVER,
    ApprovalDecision.REJECT: Operation.REJECT_DRIVER,
}


class RegistrationService:
    def __init__(
        self, users: UserRepository, hasher: PasswordHasher = password_hasher
    ):
        self.users = users
        self.hasher = hasher

    async def register(
        self,
        *,
        email: str,
        password: str,
        name: str,
        phone: Optional[str] = None,
        license_number: Optional[str] = None,
        role: Optional[str] = None,
    ) -> User:
        if await self.users.exists_by_email(email):
            raise DuplicateError("Error: Email is already in use!")

        parsed_role = parse_role(role)

        user = User(
            email=email,
            password_hash=self.hasher.hash(password),
            name=name,
            phone=phone,
            license_number=license_number,
            role=parsed_role,
            approval_status=initial_approval_status(parsed_role),
        )
        try:
            user = await self.users.save(user)
        except IntegrityError:
            raise DuplicateError("Error: Email is already in use!") from None

        logger.info(
            "Registered user %s (role=%s, approval=%s)",
            user.id,
            user.role.value,
            user.approval_status.value,
        )
        return user

    async def decide(
        self, actor: Identity, user_id: int, decision: ApprovalDecision
    ) -> User:
        require(actor, _DECISION_OPERATIONS[decision])

        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")

        user.apply_decision(decision)
        user = await self.users.save(user)
        logger.info(
            "User %s %s by admin %s", user_id, user.approval_status.value, actor.id
        )
        return user

    async def approve(self, actor: Identity, user_id: int) -> User:
        return await self.decide(actor, user_id, ApprovalDecision.APPROVE)

    async def reject(self, actor: Identity, user_id: int) -> User:
        return await self.decide(actor, user_id, ApprovalDecision.REJECT)

    async def list_users(self, actor: Identity) -> list[User]:
        require(actor, Operation.LIST_ALL_USERS)
        return await self.users.list_all()
