from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from src.adapter.services.email_senders import ConsoleEmailSender, SendGridEmailSender
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.session import SessionContext
from src.app.services.email_sender import EmailSender
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import UserPrincipal
from src.app.use_cases.sessions import RestoreSessionUseCase
from src.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# Shared so the dummy digest used for unknown usernames is computed once
_password_hasher = BcryptPasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_hasher() -> PasswordHasher:
    return _password_hasher


def get_email_sender() -> EmailSender:
    if ApplicationConfig.EMAIL_BACKEND == "sendgrid":
        return SendGridEmailSender(
            api_key=ApplicationConfig.SENDGRID_API_KEY,
            from_address=ApplicationConfig.EMAIL_FROM,
            api_url=ApplicationConfig.SENDGRID_API_URL,
            timeout=ApplicationConfig.EMAIL_TIMEOUT_SECONDS,
        )
    return ConsoleEmailSender()


async def get_session_context(
    request: Request, uow: UnitOfWork = Depends(get_unit_of_work)
) -> SessionContext:
    """
    Resolve the session cookie into an authentication state.

    A missing, unknown or expired token yields an unauthenticated context;
    stale rows are cleaned up by the restore use case.
    """
    token = request.cookies.get(ApplicationConfig.SESSION_COOKIE_NAME)
    if not token:
        return SessionContext(uow)

    result = await RestoreSessionUseCase(uow).execute(token)
    if result.is_err():
        return SessionContext(uow, token=token)

    return SessionContext(uow, token=token, principal=result.value)


async def get_current_principal(
    context: SessionContext = Depends(get_session_context),
) -> UserPrincipal:
    if not context.is_authenticated():
        raise ClientError(Error("UNAUTHORIZED", "Authentication required"), status_code=401)
    return context.current_principal()
