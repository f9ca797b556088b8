"""
Notes Backend — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── database: Database handle on a throwaway SQLite file, schema synced
    ├── token_service: TokenService with a fixed test secret
    ├── test_client: HTTPX AsyncClient wired to create_app(database=...)
    ├── register_user: async helper creating a user and logging them in
    └── auth_header / other_auth_header: bearer headers for two users
"""

import os

# Must be set before noteapp.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["SECRET"] = "test-secret"
os.environ["SHARED_PASSWORD"] = "secret"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from noteapp.database import Database  # noqa: E402
from noteapp.main import create_app  # noqa: E402
from noteapp.services.token_service import TokenService  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get(mock_db_session):
            mock_db_session.get.return_value = note
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    await db.sync_schema()
    yield db
    await db.dispose()


@pytest.fixture
def token_service():
    return TokenService(secret="test-secret", expire_minutes=60, shared_password="secret")


@pytest_asyncio.fixture
async def test_client(database, token_service):
    """
    HTTPX AsyncClient talking to a fresh app over ASGITransport.

    The lifespan doesn't run under ASGITransport; the `database` fixture has
    already created the schema.
    """
    app = create_app(database=database, token_service=token_service)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register_user(test_client):
    """
    Returns an async helper: register a user, log in, return
    (user_json, {"Authorization": "Bearer <token>"}).
    """

    async def _register(username, name, password=None):
        body = {"username": username, "name": name}
        if password:
            body["password"] = password
        created = await test_client.post("/api/users", json=body)
        assert created.status_code == 201, created.text

        login = await test_client.post(
            "/api/login",
            json={"username": username, "password": password or "secret"},
        )
        assert login.status_code == 200, login.text
        return created.json(), {"Authorization": f"Bearer {login.json()['token']}"}

    return _register


@pytest_asyncio.fixture
async def auth_header(register_user):
    _, header = await register_user("mluukkai@helsinki.fi", "Matti Luukkainen")
    return header


@pytest_asyncio.fixture
async def other_auth_header(register_user):
    _, header = await register_user("hellas@fullstack.org", "Arto Hellas")
    return header
