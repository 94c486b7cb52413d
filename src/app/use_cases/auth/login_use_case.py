"""
Login Use Case

Verifies username + password and produces the authenticated principal.
"""

import logging
from typing import Optional

from src.libs.result import Error, Result, Return
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent, User
from .dtos import UserPrincipal

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid username or password")


class LoginUseCase:
    """
    Use case for local-credential authentication.

    Business Rules:
    - Lookup is by username only
    - Unknown user and wrong password return the same INVALID_CREDENTIALS error;
      the distinction is only logged and audited server-side
    - Unknown users still cost one hash verification
    - A digest produced with a lower cost factor is upgraded on success
    - Updates user.last_login_at
    - No lockout or rate limiting
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(self, username: str, password: str) -> Result[UserPrincipal]:
        """
        Execute login use case.

        Args:
            username: Username
            password: Plain text password

        Returns:
            Result with UserPrincipal, or Error(INVALID_CREDENTIALS)
        """
        async with self.uow:
            logger.info(f"Login attempt for user: {username}")
            user = await self.uow.users.get_by_username(username)

            if user is None:
                self.hasher.verify_dummy(password)
                logger.info(f"Login failed, unknown user: {username}")
                await self._record_failure(username, "unknown_user")
                return Return.err(INVALID_CREDENTIALS)

            if not self.hasher.verify(password, user.password_hash):
                logger.info(f"Login failed, wrong password for user: {user.id}")
                await self._record_failure(username, "bad_password", user)
                return Return.err(INVALID_CREDENTIALS)

            if self.hasher.needs_rehash(user.password_hash):
                user.password_hash = self.hasher.hash(password)
                logger.info(f"Password hash upgraded for user: {user.id}")

            user.last_login_at = utc_now()
            user = await self.uow.users.update(user)

            audit = AuditEvent(
                business_id=user.business_id,
                user_id=user.id,
                action="login",
                event_metadata={"username": username},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Login successful for user: {user.id}")
            return Return.ok(UserPrincipal.from_user(user))

    async def _record_failure(
        self, username: str, reason: str, user: Optional[User] = None
    ):
        audit = AuditEvent(
            business_id=user.business_id if user else None,
            user_id=user.id if user else None,
            action="login_failed",
            event_metadata={"username": username, "reason": reason},
        )
        await self.uow.audit_events.create(audit)
        await self.uow.commit()
