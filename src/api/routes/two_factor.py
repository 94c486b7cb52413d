"""
Two-Factor API Routes

Email-code two-factor enrollment for the signed-in user.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.app.services.email_sender import EmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import UserPrincipal
from src.app.use_cases.two_factor import (
    DisableTwoFactorResponse,
    DisableTwoFactorUseCase,
    EnableTwoFactorResponse,
    EnableTwoFactorUseCase,
    VerifyTwoFactorResponse,
    VerifyTwoFactorUseCase,
)
from src.depends import get_current_principal, get_email_sender, get_unit_of_work

router = APIRouter(prefix="/2fa", tags=["Two-Factor"])

VERIFICATION_ERRORS = (
    "NO_VERIFICATION_IN_PROGRESS",
    "CODE_EXPIRED",
    "INVALID_CODE",
)


@router.post(
    "/enable", status_code=status.HTTP_200_OK, response_model=EnableTwoFactorResponse
)
async def enable_two_factor(
    principal: UserPrincipal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """
    Email a fresh 6-digit verification code to the signed-in user.

    Raises:
        - 400 Bad Request: Two-factor already verified (disable first)
        - 401 Unauthorized: Not signed in
        - 500 Internal Server Error: Email could not be dispatched; nothing changed
    """
    use_case = EnableTwoFactorUseCase(
        uow,
        email_sender,
        code_ttl_minutes=ApplicationConfig.TWO_FACTOR_CODE_TTL_MINUTES,
    )
    result = await use_case.execute(UUID(principal.id))

    if result.is_err():
        error = result.error
        if error.code == "TWO_FACTOR_ALREADY_ENABLED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class VerifyTwoFactorRequest(BaseModel):
    """POST /2fa/verify request payload"""

    code: str = Field(..., min_length=1, max_length=32, description="Code from the email")


@router.post(
    "/verify", status_code=status.HTTP_200_OK, response_model=VerifyTwoFactorResponse
)
async def verify_two_factor(
    request: VerifyTwoFactorRequest,
    principal: UserPrincipal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Confirm the emailed code and receive one-time backup codes.

    The backup codes are only ever shown in this response.

    Raises:
        - 400 Bad Request: No verification in progress, code expired or invalid
        - 401 Unauthorized: Not signed in
    """
    use_case = VerifyTwoFactorUseCase(
        uow, backup_code_count=ApplicationConfig.BACKUP_CODE_COUNT
    )
    result = await use_case.execute(UUID(principal.id), request.code)

    if result.is_err():
        error = result.error
        if error.code in VERIFICATION_ERRORS:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/disable", status_code=status.HTTP_200_OK, response_model=DisableTwoFactorResponse
)
async def disable_two_factor(
    principal: UserPrincipal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Turn two-factor off and discard the pending code and backup codes"""
    result = await DisableTwoFactorUseCase(uow).execute(UUID(principal.id))

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
