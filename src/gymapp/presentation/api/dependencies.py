"""FastAPI dependency injection for the GymApp API.

Provides dependencies for:
- Database sessions
- Authentication services
- The bearer token gate (current user id from the access token)
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from gymapp.application.services import AuthenticationService
from gymapp.domain.user import User
from gymapp.infrastructure.persistence.sqlalchemy.models import Base
from gymapp.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from gymapp_auth import InvalidTokenError, JWTService, PasswordHashingService
from gymapp_auth.persistence.sqlalchemy import (
    AuthBase,
    RefreshTokenRepositorySQLAlchemy,
)
from gymapp_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_settings)]


@lru_cache()
def get_database_url() -> str:
    """
    Get database URL from application settings.

    Returns
    -------
    Database URL string
    """
    url = get_settings().database_url

    # Ensure data directory exists for SQLite
    if url.startswith("sqlite"):
        db_path = url.split("///")[-1]
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all requests.
    """
    return create_async_engine(
        get_database_url(),
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get the shared async session maker (singleton)."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Database Schema Management
# -----------------------------------------------------------------------------


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables (idempotent).

    Covers both the application tables and the auth tables, which use
    separate declarative bases.
    """
    engine = engine or get_engine()
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.run_sync(AuthBase.metadata.create_all)

    logger.info("Database schema is up to date (missing tables created if needed)")


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with the shared signing secret."""
    return JWTService(secret_key=settings.jwt_secret_key.get_secret_value())


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(rounds=settings.password_hash_rounds)


async def get_authentication_service(
    session: DBSession,
    settings: SettingsDep,
    jwt_service: JWTService = Depends(get_jwt_service),
    password_service: PasswordHashingService = Depends(get_password_service),
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service orchestrates user registration, login, and token management.
    """
    return build_authentication_service(
        session,
        settings,
        jwt_service=jwt_service,
        password_service=password_service,
    )


def build_authentication_service(
    session: AsyncSession,
    settings: Settings,
    jwt_service: JWTService | None = None,
    password_service: PasswordHashingService | None = None,
) -> AuthenticationService:
    """Wire an AuthenticationService for a session outside of a request."""
    return AuthenticationService(
        user_repository=UserRepositorySQLAlchemy(session),
        refresh_token_repository=RefreshTokenRepositorySQLAlchemy(
            session,
            token_ttl=settings.refresh_token_ttl,
        ),
        password_service=password_service or get_password_service(settings),
        jwt_service=jwt_service or get_jwt_service(settings),
        access_token_ttl=settings.access_token_ttl,
        refresh_token_ttl=settings.refresh_token_ttl,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


# -----------------------------------------------------------------------------
# Current User (Bearer token gate)
# -----------------------------------------------------------------------------


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_id(
    auth_service: AuthService,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> int:
    """
    FastAPI dependency resolving the bearer token to a user id.

    Only the token itself is checked (signature and expiry); no database
    lookup happens here.

    Raises
    ------
    HTTPException
        401 if the header is missing or the token is invalid
    """
    if credentials is None:
        raise _unauthorized("Authentication required")

    try:
        return auth_service.validate_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning("Rejected bearer token: %s", e)
        raise _unauthorized("Invalid or expired token") from e


# Type alias for injected current user id
CurrentUserId = Annotated[int, Depends(get_current_user_id)]


async def get_current_user(
    user_id: CurrentUserId,
    auth_service: AuthService,
) -> User:
    """
    FastAPI dependency loading the authenticated User.

    Raises
    ------
    UserNotFoundError
        If the token's user no longer exists (mapped to 404)
    """
    return await auth_service.get_user(user_id)


# Type alias for injected current user
CurrentUser = Annotated[User, Depends(get_current_user)]
