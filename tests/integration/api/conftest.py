"""Pytest fixtures for API integration tests.

Uses a per-test SQLite database file; the app's session dependency is
overridden to point at it.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from gymapp.infrastructure.persistence.sqlalchemy.models import Base
from gymapp.presentation.api.app import create_app
from gymapp.presentation.api.dependencies import get_db_session
from gymapp_auth import JWTService
from gymapp_auth.persistence.sqlalchemy import AuthBase
from gymapp_config.settings import Settings, get_settings

TEST_JWT_SECRET = "test-jwt-secret-for-api-tests-0123456789abcdef"


def _make_settings(**overrides) -> Settings:
    values = {
        "jwt_secret_key": SecretStr(TEST_JWT_SECRET),
        "postgres_password": SecretStr("test-password"),
        "api_host": "127.0.0.1",
        "api_debug": True,
        "api_cors_origins": "http://localhost:3000",
        "password_hash_rounds": 4,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled and fast hashing."""
    return _make_settings()


def _setup_test_database(async_engine):
    """Create all tables in a fresh event loop.

    Runs outside TestClient's loop to avoid conflicts.
    """

    async def _setup():
        async with async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            await conn.run_sync(AuthBase.metadata.create_all)

    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(_setup())
    finally:
        loop.close()


def _build_client(settings: Settings, async_engine) -> TestClient:
    _setup_test_database(async_engine)

    app = create_app(settings=settings)

    test_session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db_session():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_settings] = lambda: settings

    # Not used as a context manager: the lifespan would touch the real engine
    return TestClient(app)


@pytest.fixture
def test_client(api_settings, async_engine) -> TestClient:
    """Client for an app without refresh token rotation."""
    return _build_client(api_settings, async_engine)


@pytest.fixture
def rotating_client(async_engine) -> TestClient:
    """Client for an app with refresh token rotation enabled."""
    return _build_client(_make_settings(jwt_rotate_refresh_tokens=True), async_engine)


@pytest.fixture
def registered_user_data() -> dict:
    return {"email": "alice@example.com", "password": "secret123"}


@pytest.fixture
def registration(test_client, registered_user_data) -> dict:
    """Register the test user and return the response body."""
    response = test_client.post("/auth/register", json=registered_user_data)
    assert response.status_code == 201, (
        f"Registration failed: {response.status_code} - {response.text}"
    )
    return response.json()


@pytest.fixture
def auth_headers(registration) -> dict:
    return {"Authorization": f"Bearer {registration['access_token']}"}


@pytest.fixture
def jwt_service() -> JWTService:
    """Codec sharing the app's signing secret, for hand-made tokens."""
    return JWTService(secret_key=TEST_JWT_SECRET)
