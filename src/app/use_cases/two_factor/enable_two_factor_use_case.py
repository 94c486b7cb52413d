"""
Enable Two-Factor Use Case

Starts email-based 2FA verification for the signed-in user.
"""

import logging
from datetime import timedelta
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.email_sender import EmailSender
from src.app.services.email_templates import two_factor_code_message
from src.app.services.tokens import generate_verification_code
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent
from .dtos import EnableTwoFactorResponse

logger = logging.getLogger(__name__)


class EnableTwoFactorUseCase:
    """
    Use case for enabling 2FA (Disabled/PendingVerification -> PendingVerification).

    Business Rules:
    - Caller acts on their own identity only
    - Generates a uniformly random 6-digit code valid for 10 minutes
    - Calling again while pending replaces the code
    - Already verified users must disable first (backup codes are never
      regenerated silently)
    - The new code is committed before the email goes out; if dispatch fails
      the previous 2FA state is put back, unless the code was already replaced
    """

    def __init__(
        self, uow: UnitOfWork, email_sender: EmailSender, code_ttl_minutes: int = 10
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.code_ttl_minutes = code_ttl_minutes

    async def execute(self, user_id: UUID) -> Result[EnableTwoFactorResponse]:
        """
        Returns:
            Result with EnableTwoFactorResponse, or Error
            (USER_NOT_FOUND | TWO_FACTOR_ALREADY_ENABLED | EMAIL_DISPATCH_FAILED)
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if user.two_factor_verified:
                return Return.err(
                    Error(
                        "TWO_FACTOR_ALREADY_ENABLED",
                        "Two-factor authentication is already enabled; disable it first",
                    )
                )

            previous = (
                user.two_factor_enabled,
                user.two_factor_temp_code,
                user.two_factor_temp_expires_at,
            )
            code = generate_verification_code()
            expires_at = utc_now() + timedelta(minutes=self.code_ttl_minutes)

            user.two_factor_enabled = True
            user.two_factor_temp_code = code
            user.two_factor_temp_expires_at = expires_at
            user = await self.uow.users.update(user)

            audit_event = AuditEvent(
                business_id=user.business_id,
                user_id=user.id,
                action="two_factor_enable_requested",
            )
            await self.uow.audit_events.create(audit_event)

            # No write transaction stays open while the mail provider is called
            await self.uow.commit()

            sent = await self.email_sender.send(
                two_factor_code_message(user.email, code, self.code_ttl_minutes)
            )
            if sent.is_err():
                withdrawn = await self.uow.users.withdraw_two_factor_code(
                    user_id, code, *previous
                )
                await self.uow.commit()
                logger.error(
                    f"2FA code not delivered for user: {user_id} (withdrawn={withdrawn})"
                )
                return Return.err(sent.error)

            logger.info(f"2FA verification code sent to user: {user_id}")
            return Return.ok(
                EnableTwoFactorResponse(
                    status="pending",
                    message="Verification code sent",
                    expires_at=expires_at,
                )
            )
