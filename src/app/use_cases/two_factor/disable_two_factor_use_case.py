import logging
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from .dtos import DisableTwoFactorResponse

logger = logging.getLogger(__name__)


class DisableTwoFactorUseCase:
    """
    Use case for disabling 2FA (any state -> Disabled).

    Clears enabled, verified, backup codes and any pending code.
    Idempotent.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[DisableTwoFactorResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            user.two_factor_enabled = False
            user.two_factor_verified = False
            user.backup_codes = None
            user.two_factor_temp_code = None
            user.two_factor_temp_expires_at = None
            user = await self.uow.users.update(user)

            audit_event = AuditEvent(
                business_id=user.business_id,
                user_id=user.id,
                action="two_factor_disabled",
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            logger.info(f"2FA disabled for user: {user_id}")
            return Return.ok(
                DisableTwoFactorResponse(
                    status="disabled",
                    message="Two-factor authentication disabled",
                )
            )
