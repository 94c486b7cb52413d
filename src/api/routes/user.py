from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.api.utils.session import SessionContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import UserPrincipal
from src.app.use_cases.users import (
    DeleteAccountUseCase,
    DeleteUserResponse,
    UpdateProfileCommand,
    UpdateProfileUseCase,
)
from src.depends import get_current_principal, get_session_context, get_unit_of_work

router = APIRouter(tags=["User"])


@router.get("/user", status_code=status.HTTP_200_OK, response_model=UserPrincipal)
async def get_user(principal: UserPrincipal = Depends(get_current_principal)):
    """
    Current signed-in user.

    Raises:
        - 401 Unauthorized: No session, or the session is unknown or expired
    """
    return principal


class UpdateProfileRequest(BaseModel):
    """PATCH /user request payload. Omitted fields are left unchanged."""

    first_name: Optional[str] = Field(None, alias="firstName", max_length=150)
    last_name: Optional[str] = Field(None, alias="lastName", max_length=150)
    email: Optional[EmailStr] = None

    model_config = {"populate_by_name": True}


@router.patch("/user", status_code=status.HTTP_200_OK, response_model=UserPrincipal)
async def update_user(
    request: UpdateProfileRequest,
    principal: UserPrincipal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update own profile fields.

    Raises:
        - 400 Bad Request: Email already registered to another user
        - 401 Unauthorized: Not signed in
    """
    command = UpdateProfileCommand(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
    )
    result = await UpdateProfileUseCase(uow).execute(UUID(principal.id), command)

    if result.is_err():
        error = result.error
        if error.code == "DUPLICATE_IDENTITY":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.delete("/user", status_code=status.HTTP_200_OK, response_model=DeleteUserResponse)
async def delete_user(
    response: Response,
    principal: UserPrincipal = Depends(get_current_principal),
    context: SessionContext = Depends(get_session_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Delete own account together with all its sessions, and clear the cookie"""
    result = await DeleteAccountUseCase(uow).execute(UUID(principal.id))

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    await context.destroy_session(response)
    return result.value
