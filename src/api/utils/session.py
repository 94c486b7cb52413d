"""
Session cookie handling.

The cookie carries an opaque random token; the server-side session maps it to
a user id and the user is reloaded on every request.
"""

from typing import Optional
from uuid import UUID

from fastapi import Response

from config import ApplicationConfig
from src.api.error import ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import UserPrincipal
from src.app.use_cases.sessions import DestroySessionUseCase, EstablishSessionUseCase


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=ApplicationConfig.SESSION_COOKIE_NAME,
        value=token,
        max_age=ApplicationConfig.SESSION_TTL_HOURS * 60 * 60,
        path="/",
        httponly=True,
        secure=ApplicationConfig.COOKIE_SECURE,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=ApplicationConfig.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=ApplicationConfig.COOKIE_SECURE,
        samesite="lax",
    )


class SessionContext:
    """
    Per-request authentication state: Unauthenticated or Authenticated(principal).

    Built by the get_session_context dependency from the request cookie.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token: Optional[str] = None,
        principal: Optional[UserPrincipal] = None,
    ):
        self.uow = uow
        self.token = token
        self.principal = principal

    def is_authenticated(self) -> bool:
        return self.principal is not None

    def current_principal(self) -> Optional[UserPrincipal]:
        return self.principal

    async def establish_session(self, response: Response, principal: UserPrincipal) -> None:
        """Start a fresh session for principal, replacing any presented one"""
        use_case = EstablishSessionUseCase(self.uow, ttl_hours=ApplicationConfig.SESSION_TTL_HOURS)

        result = await use_case.execute(UUID(principal.id), replaced_token=self.token)
        if result.is_err():
            raise ServerError(result.error)

        set_session_cookie(response, result.value.token)
        self.token = result.value.token
        self.principal = principal

    async def destroy_session(self, response: Response) -> None:
        """Drop the server-side session (if any) and tell the client to forget the cookie"""
        await DestroySessionUseCase(self.uow).execute(self.token)
        clear_session_cookie(response)
        self.token = None
        self.principal = None
