from uuid import UUID

from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserPrincipal
from .access import load_business_admin
from .dtos import BusinessUsersResponse


class ListBusinessUsersUseCase:
    """Lists every user of the admin's business"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor_id: UUID) -> Result[BusinessUsersResponse]:
        async with self.uow:
            admin = await load_business_admin(self.uow, actor_id)
            if admin.is_err():
                return Return.err(admin.error)

            users = await self.uow.users.list_by_business_id(admin.value.business_id)
            return Return.ok(
                BusinessUsersResponse(users=[UserPrincipal.from_user(u) for u in users])
            )
