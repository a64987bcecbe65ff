"""Authentication router for user registration, login, and token management."""

import logging

from fastapi import APIRouter, status

from gymapp.domain.user import User
from gymapp.presentation.api.dependencies import (
    AuthService,
    DBSession,
    SettingsDep,
)
from gymapp.presentation.api.schemas.auth import (
    AccessTokenResponse,
    AuthResponse,
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    UserResponse,
)
from gymapp_auth import AuthError, TokenPair

logger = logging.getLogger(__name__)

router = APIRouter()


def _create_auth_response(user: User, tokens: TokenPair) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=tokens.expires_in,
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "Invalid input"},
        409: {"description": "Email already registered"},
    },
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService,
    session: DBSession,
) -> AuthResponse:
    """
    Create a new user account and return a token pair.

    The user and the refresh token are committed together; if issuing
    tokens fails the registration is rolled back.
    """
    try:
        user = await auth_service.register(
            email=request.email,
            password=request.password,
        )
        tokens = await auth_service.generate_tokens(user.id)
        await session.commit()
    except AuthError:
        await session.rollback()
        raise

    return _create_auth_response(user, tokens)


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
    session: DBSession,
) -> AuthResponse:
    """
    Authenticate with email and password.

    Returns the user together with a fresh access/refresh token pair.
    """
    try:
        user = await auth_service.login(
            email=request.email,
            password=request.password,
        )
        tokens = await auth_service.generate_tokens(user.id)
        await session.commit()
    except AuthError:
        await session.rollback()
        raise

    return _create_auth_response(user, tokens)


@router.post(
    "/refresh",
    summary="Refresh access token",
    responses={
        200: {"description": "Access token issued"},
        401: {"description": "Invalid, unknown or expired refresh token"},
    },
)
async def refresh_token(
    request: RefreshRequest,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
) -> AccessTokenResponse:
    """
    Get a new access token using a stored refresh token.

    With rotation enabled the old refresh token is revoked and a new one
    is returned alongside the access token.
    """
    if not settings.jwt_rotate_refresh_tokens:
        access_token = await auth_service.refresh_access_token(request.refresh_token)
        return AccessTokenResponse(
            access_token=access_token,
            expires_in=auth_service.access_token_expires_in,
        )

    try:
        tokens = await auth_service.rotate_refresh_token(request.refresh_token)
        await session.commit()
    except AuthError:
        await session.rollback()
        raise

    return AccessTokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=tokens.expires_in,
    )


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke a refresh token",
    responses={
        204: {"description": "Refresh token revoked"},
        401: {"description": "Unknown refresh token"},
    },
)
async def logout(
    request: LogoutRequest,
    auth_service: AuthService,
    session: DBSession,
) -> None:
    """Delete the given refresh token so it can no longer be used."""
    try:
        await auth_service.logout(request.refresh_token)
        await session.commit()
    except AuthError:
        await session.rollback()
        raise
