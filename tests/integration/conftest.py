import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_email_sender, get_password_hasher, get_unit_of_work
from tests.fixtures.fake_email_sender import RecordingEmailSender


@pytest_asyncio.fixture
async def engine(tmp_path):
    # Fresh sqlite file per test
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'auth.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def email_sender():
    return RecordingEmailSender()


def build_client(get_uow, email_sender) -> AsyncClient:
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)
    hasher = BcryptPasswordHasher(rounds=4)

    app.dependency_overrides[get_unit_of_work] = get_uow
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest_asyncio.fixture
async def client(db_session, email_sender):
    """
    API client against the real app. The app shares db_session with the test,
    sends mail into email_sender and hashes with a low bcrypt cost.
    """

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    async with build_client(override_get_unit_of_work, email_sender) as ac:
        yield ac


@pytest_asyncio.fixture
async def concurrent_client(engine, email_sender):
    """
    Same app, but every request opens its own database session as it does
    in production, so overlapping requests contend for real.
    """
    Session = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )

    async def override_get_unit_of_work():
        async with Session() as session:
            yield SqlAlchemyUnitOfWork(session)

    async with build_client(override_get_unit_of_work, email_sender) as ac:
        yield ac
