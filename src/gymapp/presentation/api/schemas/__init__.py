"""API request/response schemas."""

from gymapp.presentation.api.schemas.auth import (
    AccessTokenResponse,
    AuthResponse,
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    UserResponse,
)
from gymapp.presentation.api.schemas.users import UpdateProfileRequest

__all__ = [
    "AccessTokenResponse",
    "AuthResponse",
    "LoginRequest",
    "LogoutRequest",
    "RefreshRequest",
    "RegisterRequest",
    "UpdateProfileRequest",
    "UserResponse",
]
