"""
Restore Session Use Case

Resolves a session cookie to the current principal.
"""

import logging

from src.libs.result import Error, Result, Return
from src.app.services.tokens import hash_secret
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserPrincipal
from src.domain.base import utc_now

logger = logging.getLogger(__name__)


class RestoreSessionUseCase:
    """
    Use case for rehydrating the principal behind a session token.

    Business Rules:
    - The session only yields a user id; the user is reloaded on every call
      so role and business changes apply immediately
    - Expired sessions are deleted when presented
    - A session whose user no longer exists is deleted and fails closed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[UserPrincipal]:
        """
        Returns:
            Result with UserPrincipal, or Error(SESSION_NOT_FOUND | SESSION_EXPIRED | USER_NOT_FOUND)
        """
        async with self.uow:
            token_hash = hash_secret(token)
            session = await self.uow.sessions.get_by_token_hash(token_hash)

            if session is None:
                logger.info("Session restore failed: unknown session")
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

            if session.expires_at < utc_now():
                await self.uow.sessions.delete_by_token_hash(token_hash)
                await self.uow.commit()
                logger.info(f"Session restore failed: expired session for user: {session.user_id}")
                return Return.err(Error("SESSION_EXPIRED", "Session has expired"))

            user = await self.uow.users.get_by_id(session.user_id)
            if user is None:
                await self.uow.sessions.delete_by_token_hash(token_hash)
                await self.uow.commit()
                logger.warning(f"Session restore failed: user no longer exists: {session.user_id}")
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            return Return.ok(UserPrincipal.from_user(user))
