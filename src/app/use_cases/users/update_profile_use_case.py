import logging
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.repositories.user_repository import DuplicateIdentityError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserPrincipal
from src.domain.entities import AuditEvent
from .dtos import UpdateProfileCommand

logger = logging.getLogger(__name__)


class UpdateProfileUseCase:
    """
    Use case for self-service profile updates.

    Business Rules:
    - Only fields present in the command change
    - A new email must not belong to another user (DUPLICATE_IDENTITY)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, command: UpdateProfileCommand
    ) -> Result[UserPrincipal]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            changed = []
            if command.email is not None and command.email != user.email:
                if await self.uow.users.get_by_email(command.email):
                    return Return.err(
                        Error("DUPLICATE_IDENTITY", "Email already registered")
                    )
                user.email = command.email
                changed.append("email")

            if command.first_name is not None:
                user.first_name = command.first_name
                changed.append("first_name")

            if command.last_name is not None:
                user.last_name = command.last_name
                changed.append("last_name")

            if changed:
                try:
                    user = await self.uow.users.update(user)
                except DuplicateIdentityError:
                    await self.uow.rollback()
                    return Return.err(
                        Error("DUPLICATE_IDENTITY", "Email already registered")
                    )
                audit_event = AuditEvent(
                    business_id=user.business_id,
                    user_id=user.id,
                    action="profile_updated",
                    event_metadata={"fields": changed},
                )
                await self.uow.audit_events.create(audit_event)
                await self.uow.commit()
                logger.info(f"Profile updated for user: {user_id} fields={changed}")

            return Return.ok(UserPrincipal.from_user(user))
