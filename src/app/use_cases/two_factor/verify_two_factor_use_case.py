"""
Verify Two-Factor Use Case

Confirms the emailed code and issues backup codes.
"""

import logging
import secrets
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.tokens import generate_backup_codes, hash_secret
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent
from .dtos import VerifyTwoFactorResponse

logger = logging.getLogger(__name__)

NO_VERIFICATION_IN_PROGRESS = Error(
    "NO_VERIFICATION_IN_PROGRESS", "No verification in progress"
)


class VerifyTwoFactorUseCase:
    """
    Use case for verifying 2FA (PendingVerification -> Verified).

    Business Rules:
    - NO_VERIFICATION_IN_PROGRESS when no temp code is set
    - CODE_EXPIRED after the expiry; the expired code is cleared
    - INVALID_CODE unless the submitted code equals the stored one exactly
    - On success, in one conditional update: verified=True, 10 backup codes
      stored as SHA-256 hashes, temp code and expiry cleared. At most one
      concurrent request can consume a code.
    - Backup codes are returned once, in plaintext
    """

    def __init__(self, uow: UnitOfWork, backup_code_count: int = 10):
        self.uow = uow
        self.backup_code_count = backup_code_count

    async def execute(self, user_id: UUID, code: str) -> Result[VerifyTwoFactorResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if user.two_factor_temp_code is None or user.two_factor_temp_expires_at is None:
                return Return.err(NO_VERIFICATION_IN_PROGRESS)

            now = utc_now()
            if now > user.two_factor_temp_expires_at:
                user.two_factor_temp_code = None
                user.two_factor_temp_expires_at = None
                await self.uow.users.update(user)
                await self.uow.commit()
                logger.info(f"2FA verification failed: code expired for user: {user_id}")
                return Return.err(Error("CODE_EXPIRED", "Verification code has expired"))

            stored_code = user.two_factor_temp_code
            if not secrets.compare_digest(code.encode(), stored_code.encode()):
                logger.info(f"2FA verification failed: invalid code for user: {user_id}")
                return Return.err(Error("INVALID_CODE", "Invalid verification code"))

            backup_codes = generate_backup_codes(self.backup_code_count)
            completed = await self.uow.users.complete_two_factor(
                user.id, stored_code, [hash_secret(c) for c in backup_codes], now
            )
            if not completed:
                logger.info(f"2FA verification lost race for user: {user_id}")
                return Return.err(NO_VERIFICATION_IN_PROGRESS)

            audit_event = AuditEvent(
                business_id=user.business_id,
                user_id=user.id,
                action="two_factor_verified",
                event_metadata={"backup_codes_issued": len(backup_codes)},
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            logger.info(f"2FA verified for user: {user_id}")
            return Return.ok(
                VerifyTwoFactorResponse(status="verified", backup_codes=backup_codes)
            )
