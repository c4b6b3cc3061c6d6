# messenger/tests/conftest.py

import random
import string

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from messenger.api import dependencies
from messenger.config import AppConfig
from messenger.gateways.group_gateway import GroupGateway
from messenger.gateways.message_gateway import MessageGateway
from messenger.gateways.user_gateway import UserGateway
from messenger.infrastructure import schemas
from messenger.infrastructure.database import Database
from messenger.infrastructure.security import SecurityService
from messenger.infrastructure.uow import UnitOfWork
from messenger.interactors.group_interactor import GroupInteractor
from messenger.interactors.message_interactor import MessageInteractor
from messenger.interactors.user_interactor import UserInteractor
from messenger.main import Application


def random_suffix(k: int = 8) -> str:
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=k))


@pytest.fixture(scope="function")
def app_config(tmp_path):
    """
    Provide a test configuration with an in-memory SQLite database.
    """
    return AppConfig(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        SECRET_KEY="test_secret_key",
        REFRESH_SECRET_KEY="test_refresh_secret_key",
        PROJECT_NAME="Test Messenger API",
        API_V1_STR="/api/v1",
        ALGORITHM="HS256",
        ACCESS_TOKEN_EXPIRE_MINUTES=5,
        REFRESH_TOKEN_EXPIRE_DAYS=7,
        UPLOAD_DIR=str(tmp_path / "uploads"),
        MAX_UPLOAD_SIZE=1024,
    )


@pytest.fixture(scope="function")
async def engine(app_config):
    """Create a SQLAlchemy engine sharing one in-memory SQLite connection."""
    engine = create_async_engine(
        app_config.DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    await Database(engine).connect()
    yield engine
    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(engine):
    """Provide a SQLAlchemy session for testing."""
    async_session_factory = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False
    )
    session = async_session_factory()
    yield session
    await session.close()


@pytest.fixture(scope="function")
async def uow():
    """Provide a UnitOfWork instance for testing."""
    return UnitOfWork()


@pytest.fixture(scope="function")
def security_service(app_config):
    return SecurityService(app_config)


@pytest.fixture(scope="function")
def user_interactor(db_session, uow, security_service):
    return UserInteractor(security_service, UserGateway(db_session, uow))


@pytest.fixture(scope="function")
def message_interactor(db_session, uow):
    return MessageInteractor(MessageGateway(db_session, uow))


@pytest.fixture(scope="function")
def group_interactor(db_session, uow):
    return GroupInteractor(GroupGateway(db_session, uow))


@pytest.fixture(scope="function")
async def make_user(user_interactor, db_session):
    """Factory creating committed users with the password 'testpassword'."""

    async def _make_user(
        prefix: str = "testuser", exact: bool = False
    ) -> schemas.User:
        username = prefix if exact else f"{prefix}_{random_suffix()}"
        user = await user_interactor.create_user(
            schemas.UserCreate(username=username, password="testpassword")
        )
        await db_session.commit()
        return user

    return _make_user


@pytest.fixture(scope="function")
async def test_user(make_user):
    return await make_user("testuser")


@pytest.fixture(scope="function")
async def test_user2(make_user):
    return await make_user("testuser2")


@pytest.fixture(scope="function")
def override_get_db(db_session):
    """Override the get_session dependency to use the test session."""

    async def _override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    return _override_get_db


@pytest.fixture(scope="function")
async def app(app_config, engine):
    """Create the FastAPI app with the test database."""
    application = Application(config=app_config)
    application.database = Database(engine)
    return application.create_app()


@pytest.fixture(scope="function")
async def app_with_db(app, override_get_db):
    app.dependency_overrides[dependencies.get_session] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def client(app_with_db):
    """Provide an HTTP client with the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app_with_db), base_url="http://test"
    ) as ac:
        yield ac


@pytest.fixture(scope="function")
def login(client):
    """Log a user in through the API and return the bearer header."""

    async def _login(username: str, password: str = "testpassword"):
        response = await client.post(
            "/api/v1/auth/login", data={"username": username, "password": password}
        )
        assert response.status_code == 200, f"Login failed: {response.json()}"
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login


@pytest.fixture(scope="function")
async def auth_header(login, test_user):
    return await login(test_user.username)


@pytest.fixture(scope="function")
async def auth_header2(login, test_user2):
    return await login(test_user2.username)
