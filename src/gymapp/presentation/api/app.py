"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

Paths are unversioned (``/auth/...``, ``/users/...``) so existing mobile
clients keep working.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gymapp.presentation.api.dependencies import (
    build_authentication_service,
    create_tables,
    get_engine,
    get_session_maker,
)
from gymapp.presentation.api.exception_handlers import setup_exception_handlers
from gymapp.presentation.api.routers import auth_router, users_router
from gymapp_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure application logging.

    Console output with timestamps and module names, level from settings,
    WARNING level for noisy third-party libraries.
    """
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    logging.getLogger("gymapp").setLevel(log_level)
    logging.getLogger("gymapp_auth").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """User registration, login and token management.

- Passwords are hashed with bcrypt
- Short-lived JWT access tokens (HS256)
- Long-lived refresh tokens, stored server side and revocable via logout
""",
    },
    {
        "name": "Users",
        "description": "Profile of the authenticated user.",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
]


async def _purge_expired_refresh_tokens() -> None:
    """Remove expired refresh tokens left over from previous runs."""
    async with get_session_maker()() as session:
        auth_service = build_authentication_service(session, get_settings())
        removed = await auth_service.purge_expired_refresh_tokens()
        await session.commit()
    logger.info("Startup cleanup removed %d expired refresh token(s)", removed)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting GymApp API v%s...", API_VERSION)
    engine = get_engine()
    try:
        await create_tables(engine)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None
    await _purge_expired_refresh_tokens()
    yield

    # Shutdown - dispose the shared engine and its connection pool
    logger.info("Shutting down GymApp API...")
    await engine.dispose()
    logger.info("Database connections closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    # Configure logging on first app creation (not on module import)
    _configure_logging()

    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Account and session management for the GymApp mobile app.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    app.include_router(users_router, prefix="/users", tags=["Users"])

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint for load balancers and monitoring."""
        return {
            "status": "healthy",
            "version": API_VERSION,
        }

    return app


# Application instance for uvicorn
app = create_app()
