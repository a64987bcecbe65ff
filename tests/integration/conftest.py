"""
SQLite-backed fixtures for integration tests.

Each test gets its own database file under ``tmp_path``, so tests are fully
isolated and need no external services.

Usage:
    async def test_something(db_session):
        repo = SomeRepository(db_session)
        await repo.save(entity)
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from gymapp.infrastructure.persistence.sqlalchemy.models import Base
from gymapp_auth.persistence.sqlalchemy import AuthBase


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'gymapp-test.db'}"


@pytest.fixture
def async_engine(database_url):
    """Async engine for the per-test database file.

    NullPool keeps no connection open between uses, so the engine can be
    shared between event loops (pytest-asyncio and TestClient).
    """
    return create_async_engine(database_url, echo=False, poolclass=NullPool)


@pytest_asyncio.fixture
async def db_session(async_engine):
    """
    Provide a session on a freshly created schema.

    Uncommitted changes are rolled back after the test.
    """
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.run_sync(AuthBase.metadata.create_all)

    session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_maker() as session:
        yield session
        await session.rollback()

    await async_engine.dispose()
