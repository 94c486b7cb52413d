import logging
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from .dtos import DeleteUserResponse

logger = logging.getLogger(__name__)


class DeleteAccountUseCase:
    """
    Use case for self-service account deletion.

    Removes every session of the user together with the user record, so no
    session can outlive its identity.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[DeleteUserResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            business_id = user.business_id
            revoked_count = await self.uow.sessions.delete_all_by_user_id(user_id)
            await self.uow.users.delete(user_id)

            audit_event = AuditEvent(
                business_id=business_id,
                user_id=user_id,
                action="user_deleted",
                event_metadata={"by": "self", "sessions_revoked": revoked_count},
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            logger.info(f"Account deleted: {user_id}")
            return Return.ok(
                DeleteUserResponse(
                    status="deleted",
                    user_id=str(user_id),
                    sessions_revoked=revoked_count,
                )
            )
