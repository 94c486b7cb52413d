"""
Business user administration.

Admins manage the other members of their own business.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.error import ADMIN_ERROR_STATUS, raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import UserPrincipal
from src.app.use_cases.users import (
    BusinessUsersResponse,
    ChangeRoleUseCase,
    DeleteUserResponse,
    ListBusinessUsersUseCase,
    RemoveUserUseCase,
)
from src.depends import get_current_principal, get_unit_of_work
from src.domain.entities import UserRole

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", status_code=status.HTTP_200_OK, response_model=BusinessUsersResponse)
async def list_users(
    principal: UserPrincipal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List the members of the admin's business.

    Raises:
        - 401 Unauthorized: Not signed in
        - 403 Forbidden: Not an admin, or not attached to a business
    """
    result = await ListBusinessUsersUseCase(uow).execute(UUID(principal.id))

    if result.is_err():
        raise_for_error(result.error, ADMIN_ERROR_STATUS)

    return result.value


class ChangeRoleRequest(BaseModel):
    """PATCH /users/{user_id}/role request payload"""

    role: UserRole


@router.patch(
    "/{user_id}/role", status_code=status.HTTP_200_OK, response_model=UserPrincipal
)
async def change_role(
    user_id: UUID,
    request: ChangeRoleRequest,
    principal: UserPrincipal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change the role of another member of the admin's business.

    Raises:
        - 400 Bad Request: Target is the admin themself
        - 403 Forbidden: Not an admin of a business
        - 404 Not Found: No such user in this business
        - 422 Unprocessable Entity: Unknown role
    """
    result = await ChangeRoleUseCase(uow).execute(
        UUID(principal.id), user_id, request.role
    )

    if result.is_err():
        raise_for_error(result.error, ADMIN_ERROR_STATUS)

    return result.value


@router.delete(
    "/{user_id}", status_code=status.HTTP_200_OK, response_model=DeleteUserResponse
)
async def remove_user(
    user_id: UUID,
    principal: UserPrincipal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove another member of the admin's business and revoke their sessions.

    Raises:
        - 400 Bad Request: Target is the admin themself
        - 403 Forbidden: Not an admin of a business
        - 404 Not Found: No such user in this business
    """
    result = await RemoveUserUseCase(uow).execute(UUID(principal.id), user_id)

    if result.is_err():
        raise_for_error(result.error, ADMIN_ERROR_STATUS)

    return result.value
