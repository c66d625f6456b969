"""
Happy Thoughts API — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the whole suite.

Fixtures:
    mock_db_session   AsyncMock standing in for AsyncSession (service unit tests)
    test_settings     Settings pointing at a fresh SQLite file per test
    app               create_app(test_settings) with tables created
    test_client       HTTPX AsyncClient talking to `app` over ASGITransport
    register_user     helper coroutine: POST /users/register, returns credentials
"""

import os
from unittest.mock import AsyncMock, MagicMock

# Override settings BEFORE any app imports: importing happythoughts.main builds
# a module-level app from the environment.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_default.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.pop("RESET_DB", None)

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from happythoughts.config import Settings
from happythoughts.main import create_app
from happythoughts.security import PasswordHasher


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = thought
        result = await service.get(mock_db_session, str(thought.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        log_level="WARNING",
        rate_limit_enabled=False,
        create_tables=True,
        reset_database=False,
    )


@pytest_asyncio.fixture
async def app(test_settings):
    application = create_app(test_settings)
    # ASGITransport does not run the lifespan, so create the schema here.
    await application.state.database.create_all()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(app):
    """
    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register_user(test_client):
    """Register an account and return the `response` part of the envelope."""

    async def _register(username="happyuser", email="happy@example.com", password="s3cret-pw"):
        response = await test_client.post(
            "/users/register",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()["response"]

    return _register


@pytest.fixture
def hasher():
    return PasswordHasher()
