"""
Request Password Reset Use Case

Handles generating and mailing password reset tokens.
"""

import logging
from datetime import timedelta
from urllib.parse import urlencode

from src.libs.result import Result, Return
from src.app.services.email_sender import EmailSender
from src.app.services.email_templates import password_reset_message
from src.app.services.tokens import generate_reset_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "If an account exists for that email, a password reset link has been sent"


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Token is 32 random bytes, hex encoded, stored on the user with its expiry
    - Token expires in 1 hour by default
    - No email enumeration (same response for known and unknown emails)
    - Token is committed before the email is sent and stays valid even if
      delivery fails; it simply expires unused
    - With expose_debug_token, the token is returned in the response and a
      delivery failure is reported as an error (diagnostic mode only)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: EmailSender,
        reset_url_base: str,
        token_ttl_hours: int = 1,
        expose_debug_token: bool = False,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.reset_url_base = reset_url_base
        self.token_ttl_hours = token_ttl_hours
        self.expose_debug_token = expose_debug_token

    def _reset_link(self, token: str) -> str:
        return f"{self.reset_url_base.rstrip('/')}/reset-password?{urlencode({'token': token})}"

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with the generic response, or Error(EMAIL_DISPATCH_FAILED)
            in diagnostic mode only
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                logger.info("Password reset requested for unknown email")
                return Return.ok(RequestPasswordResetResponse(message=GENERIC_MESSAGE))

            reset_token = generate_reset_token()
            user.reset_token = reset_token
            user.reset_token_expires_at = utc_now() + timedelta(hours=self.token_ttl_hours)
            await self.uow.users.update(user)

            audit_event = AuditEvent(
                business_id=user.business_id,
                user_id=user.id,
                action="password_reset_requested",
                event_metadata={"expires_at": user.reset_token_expires_at.isoformat()},
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()
            logger.info(f"Password reset token issued for user: {user.id}")

            message = password_reset_message(
                user.email, self._reset_link(reset_token), self.token_ttl_hours
            )
            sent = await self.email_sender.send(message)
            if sent.is_err():
                logger.error(f"Password reset email not delivered for user: {user.id}")
                if self.expose_debug_token:
                    return Return.err(sent.error)

            return Return.ok(
                RequestPasswordResetResponse(
                    message=GENERIC_MESSAGE,
                    debug_token=reset_token if self.expose_debug_token else None,
                )
            )
