"""
Destroy Session Use Case

Logout: removes the server-side session, if any.
"""

import logging
from typing import Optional

from src.libs.result import Result, Return
from src.app.services.tokens import hash_secret
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent

logger = logging.getLogger(__name__)


class DestroySessionUseCase:
    """
    Use case for logout.

    Business Rules:
    - Always succeeds, whether or not a session existed
    - Returns True when a session was actually removed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: Optional[str]) -> Result[bool]:
        if not token:
            logger.info("Logout without session")
            return Return.ok(False)

        async with self.uow:
            token_hash = hash_secret(token)
            session = await self.uow.sessions.get_by_token_hash(token_hash)
            if session is None:
                logger.info("Logout with unknown session")
                return Return.ok(False)

            await self.uow.sessions.delete_by_token_hash(token_hash)

            user = await self.uow.users.get_by_id(session.user_id)
            audit_event = AuditEvent(
                business_id=user.business_id if user else None,
                user_id=session.user_id,
                action="logout",
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            logger.info(f"Logout successful for user: {session.user_id}")
            return Return.ok(True)
