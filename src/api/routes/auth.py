from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.session import SessionContext
from src.app.services.email_sender import EmailSender
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginUseCase,
    RegisterCommand,
    RegisterUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    ResetPasswordResponse,
    ResetPasswordUseCase,
    UserPrincipal,
)
from src.depends import (
    get_email_sender,
    get_password_hasher,
    get_session_context,
    get_unit_of_work,
)

router = APIRouter(tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    username: str = Field(..., min_length=1, max_length=150)
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")
    first_name: Optional[str] = Field(None, alias="firstName", max_length=150)
    last_name: Optional[str] = Field(None, alias="lastName", max_length=150)

    model_config = {"populate_by_name": True}


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=UserPrincipal,
)
async def register(
    request: RegisterRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    context: SessionContext = Depends(get_session_context),
):
    """
    Create a local account and sign it in.

    Raises:
        - 400 Bad Request: Username or email already registered
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = RegisterCommand(
        username=request.username,
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
    )

    result = await RegisterUseCase(uow, hasher).execute(command)

    if result.is_err():
        error = result.error
        if error.code == "DUPLICATE_IDENTITY":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    await context.establish_session(response, result.value)
    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    username: str = Field(..., description="Username")
    password: str = Field(..., description="User password")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=UserPrincipal,
)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    context: SessionContext = Depends(get_session_context),
):
    """
    Authenticate with username and password and start a session.

    A session cookie presented with the request is replaced, never reused.

    Raises:
        - 401 Unauthorized: Invalid credentials (same for unknown user and wrong password)
    """
    result = await LoginUseCase(uow, hasher).execute(request.username, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    await context.establish_session(response, result.value)
    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(
    response: Response,
    context: SessionContext = Depends(get_session_context),
):
    """End the current session. Always succeeds."""
    await context.destroy_session(response)
    return {"status": "logged_out"}


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
    response_model_exclude_none=True,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """
    Request Password Reset

    Returns the same message whether or not the email is registered.
    """
    use_case = RequestPasswordResetUseCase(
        uow,
        email_sender,
        reset_url_base=ApplicationConfig.APP_BASE_URL,
        token_ttl_hours=ApplicationConfig.RESET_TOKEN_TTL_HOURS,
        expose_debug_token=ApplicationConfig.EXPOSE_DEBUG_TOKENS,
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    token: str = Field(..., min_length=1, description="Password reset token from email")
    new_password: str = Field(..., alias="newPassword", description="New password (min 8 chars)")

    model_config = {"populate_by_name": True}


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ResetPasswordResponse,
)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """
    Consume a reset token and set a new password.

    Every session of the user is revoked.

    Raises:
        - 400 Bad Request: Invalid, expired or already used token; password too short
    """
    result = await ResetPasswordUseCase(uow, hasher).execute(
        request.token, request.new_password
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_OR_EXPIRED_TOKEN", "INVALID_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
