from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserRole


async def load_business_admin(uow: UnitOfWork, actor_id: UUID) -> Result[User]:
    """Actor must exist, be an admin and belong to a business"""
    actor = await uow.users.get_by_id(actor_id)
    if actor is None:
        return Return.err(Error("UNAUTHORIZED", "Authentication required"))

    if actor.role != UserRole.admin or actor.business_id is None:
        return Return.err(
            Error("FORBIDDEN", "Only business admins can manage users")
        )

    return Return.ok(actor)


async def load_business_member(
    uow: UnitOfWork, actor: User, target_user_id: UUID
) -> Result[User]:
    """Target must belong to the actor's business and not be the actor"""
    if target_user_id == actor.id:
        return Return.err(
            Error("CANNOT_MODIFY_SELF", "Use your own account settings instead")
        )

    target = await uow.users.get_by_id(target_user_id)
    if target is None or target.business_id != actor.business_id:
        return Return.err(Error("USER_NOT_FOUND", "User not found"))

    return Return.ok(target)
