"""
Remove User Use Case

Handles an admin deleting another user of the same business.
"""

import logging
from uuid import UUID

from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from .access import load_business_admin, load_business_member
from .dtos import DeleteUserResponse

logger = logging.getLogger(__name__)


class RemoveUserUseCase:
    """
    Use case for removing a user from a business.

    Business Rules:
    - Only admins can remove users, never themselves
    - Target must belong to the admin's business
    - The user and all of its sessions are deleted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, target_user_id: UUID
    ) -> Result[DeleteUserResponse]:
        async with self.uow:
            admin = await load_business_admin(self.uow, actor_id)
            if admin.is_err():
                return Return.err(admin.error)

            target = await load_business_member(self.uow, admin.value, target_user_id)
            if target.is_err():
                return Return.err(target.error)

            revoked_count = await self.uow.sessions.delete_all_by_user_id(target_user_id)
            await self.uow.users.delete(target_user_id)

            audit = AuditEvent(
                business_id=admin.value.business_id,
                user_id=actor_id,
                action="user_deleted",
                event_metadata={
                    "target_user_id": str(target_user_id),
                    "sessions_revoked": revoked_count,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"User {target_user_id} removed by admin {actor_id}")
            return Return.ok(
                DeleteUserResponse(
                    status="deleted",
                    user_id=str(target_user_id),
                    sessions_revoked=revoked_count,
                )
            )
