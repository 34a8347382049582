import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.depends import get_unit_of_work
from tests.fixtures.notifiers import RecordingNotifier


class IntegrationConfig(ApplicationConfig):
    SESSION_STORE = "sql"
    BCRYPT_ROUNDS = 4
    JWT_SECRET = "very_secret_key"
    NOTIFY_EMAIL = "owner@example.com"
    SMTP_HOST = ""


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest_asyncio.fixture
async def app(session_factory, notifier):
    from src.api.app import create_app

    app = create_app(IntegrationConfig)
    app.state.dispatcher = NotificationDispatcher(notifier)

    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app, client=("1.2.3.4", 50000))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def roaming_client(app):
    """Same app, requests arriving from a different address"""
    transport = ASGITransport(app=app, client=("9.9.9.9", 50000))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
