"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/              # Fast, isolated tests (no database)
    │   ├── gymapp_auth/   # Token codec, password hasher
    │   ├── domain/        # User aggregate
    │   └── application/   # AuthenticationService with mocked stores
    └── integration/       # SQLite (aiosqlite) backed tests
        ├── persistence/   # SQLAlchemy repositories and full auth flows
        └── api/           # FastAPI endpoints via TestClient

Required settings are given test defaults before any application module is
imported, so importing the FastAPI app never needs a real .env file.
"""

import os

import pytest

os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-for-testing-only-0123456789")
os.environ.setdefault("POSTGRES_PASSWORD", "test-password")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///:memory:")

from gymapp_config import clear_settings_cache  # noqa: E402

# Long enough for HS256 without key length warnings
TEST_SECRET = "test-secret-key-0123456789abcdef0123456789abcdef"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that verify database/persistence behavior",
    )


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Ensure every test session starts from freshly loaded settings."""
    clear_settings_cache()
    yield
    clear_settings_cache()
