"""
Reset Password Use Case

Consumes a password reset token and sets the new password.
"""

import logging

from src.libs.result import Error, Result, Return
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent
from .dtos import ResetPasswordResponse

logger = logging.getLogger(__name__)

INVALID_OR_EXPIRED_TOKEN = Error(
    "INVALID_OR_EXPIRED_TOKEN", "Invalid or expired password reset token"
)


class ResetPasswordUseCase:
    """
    Use case for consuming a password reset token.

    Business Rules:
    - Token must match the stored value exactly and not be expired
    - An expired token is cleared when presented
    - New password hash and token clearing happen in one conditional update,
      so a token succeeds at most once even under concurrent submissions
    - New password must be at least 8 characters
    - All sessions of the user are revoked
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher):
        self.uow = uow
        self.hasher = hasher

    def _validate_password(self, password: str) -> Result[None]:
        if len(password) < 8:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    "Password must be at least 8 characters long",
                )
            )
        return Return.ok(None)

    async def execute(self, token: str, new_password: str) -> Result[ResetPasswordResponse]:
        """
        Execute reset password use case.

        Args:
            token: Password reset token (plain text from email)
            new_password: New password to set

        Returns:
            Result with confirmation status, or Error

        Errors:
            - INVALID_OR_EXPIRED_TOKEN: Token unknown, expired or already used
            - INVALID_PASSWORD: Password does not meet requirements
        """
        async with self.uow:
            password_validation = self._validate_password(new_password)
            if password_validation.is_err():
                return Return.err(password_validation.error)

            user = await self.uow.users.get_by_reset_token(token)
            if user is None:
                logger.info("Password reset rejected: unknown token")
                return Return.err(INVALID_OR_EXPIRED_TOKEN)

            now = utc_now()
            if user.reset_token_expires_at is None or user.reset_token_expires_at < now:
                user.reset_token = None
                user.reset_token_expires_at = None
                await self.uow.users.update(user)
                await self.uow.commit()
                logger.info(f"Password reset rejected: expired token for user: {user.id}")
                return Return.err(INVALID_OR_EXPIRED_TOKEN)

            password_hash = self.hasher.hash(new_password)
            consumed = await self.uow.users.consume_reset_token(
                user.id, token, password_hash, now
            )
            if not consumed:
                logger.info(f"Password reset rejected: token already consumed for user: {user.id}")
                return Return.err(INVALID_OR_EXPIRED_TOKEN)

            revoked_count = await self.uow.sessions.delete_all_by_user_id(user.id)

            audit_event = AuditEvent(
                business_id=user.business_id,
                user_id=user.id,
                action="password_reset_completed",
                event_metadata={"sessions_revoked": revoked_count},
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            logger.info(f"Password reset completed for user: {user.id}")
            return Return.ok(
                ResetPasswordResponse(
                    status="success",
                    message="Password has been reset successfully",
                )
            )
