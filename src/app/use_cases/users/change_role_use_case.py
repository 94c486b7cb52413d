"""
Change User Role Use Case

Handles changing a user's role within a business.
"""

import logging
from uuid import UUID

from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserPrincipal
from src.domain.entities import AuditEvent, UserRole
from .access import load_business_admin, load_business_member

logger = logging.getLogger(__name__)


class ChangeRoleUseCase:
    """
    Use case for changing a user's role within a business.

    Business Rules:
    - Only admins can change roles
    - Target must belong to the admin's business
    - Admins cannot change their own role
    - Takes effect on the target's next request (sessions reload the user)
    - Creates audit event for compliance tracking
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, target_user_id: UUID, new_role: UserRole
    ) -> Result[UserPrincipal]:
        """
        Execute change role use case.

        Args:
            actor_id: User ID of the admin making the change
            target_user_id: User ID whose role is being changed
            new_role: Role to assign

        Returns:
            Result with the updated user, or Error
            (UNAUTHORIZED | FORBIDDEN | CANNOT_MODIFY_SELF | USER_NOT_FOUND)
        """
        async with self.uow:
            admin = await load_business_admin(self.uow, actor_id)
            if admin.is_err():
                return Return.err(admin.error)

            target = await load_business_member(self.uow, admin.value, target_user_id)
            if target.is_err():
                return Return.err(target.error)

            user = target.value
            old_role = UserRole(user.role).value

            user.role = new_role
            user = await self.uow.users.update(user)

            audit = AuditEvent(
                business_id=user.business_id,
                user_id=actor_id,
                action="role_changed",
                event_metadata={
                    "target_user_id": str(target_user_id),
                    "old_role": old_role,
                    "new_role": new_role.value,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Role of user {target_user_id} changed {old_role} -> {new_role.value} by {actor_id}")
            return Return.ok(UserPrincipal.from_user(user))
