"""
Establish Session Use Case

Creates the server-side session behind the session cookie.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from src.libs.result import Result, Return
from src.app.services.tokens import generate_session_token, hash_secret
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import Session
from .dtos import IssuedSession

logger = logging.getLogger(__name__)


class EstablishSessionUseCase:
    """
    Use case for establishing a session after authentication.

    Business Rules:
    - Always a new random token (a presented old session is deleted first)
    - Only the SHA-256 of the token is stored, with the user id
    - Absolute expiry of ttl_hours
    """

    def __init__(self, uow: UnitOfWork, ttl_hours: int = 24):
        self.uow = uow
        self.ttl_hours = ttl_hours

    async def execute(
        self, user_id: UUID, replaced_token: Optional[str] = None
    ) -> Result[IssuedSession]:
        async with self.uow:
            if replaced_token:
                await self.uow.sessions.delete_by_token_hash(hash_secret(replaced_token))

            token = generate_session_token()
            session = Session(
                token_hash=hash_secret(token),
                user_id=user_id,
                expires_at=utc_now() + timedelta(hours=self.ttl_hours),
            )
            session = await self.uow.sessions.create(session)

            await self.uow.commit()

            logger.info(f"Session established for user: {user_id}")
            return Return.ok(IssuedSession(token=token, expires_at=session.expires_at))
