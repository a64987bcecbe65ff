"""Authentication schemas for request/response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request schema for user registration."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(
        ...,
        min_length=1,
        description="Password (at most 72 bytes when UTF-8 encoded)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "password": "secret123",
            },
        },
    )


class LoginRequest(BaseModel):
    """Request schema for user login."""

    email: str = Field(..., min_length=1)
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "password": "secret123",
            },
        },
    )


class RefreshRequest(BaseModel):
    """Request schema for token refresh."""

    refresh_token: str = Field(..., description="Refresh token from login")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "refresh_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
            },
        },
    )


class LogoutRequest(BaseModel):
    """Request schema for logout (revokes the given refresh token)."""

    refresh_token: str


class UserResponse(BaseModel):
    """Response schema for user data."""

    id: int
    email: str
    height: int
    weight: int
    goal: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Response schema for successful registration or login."""

    user: UserResponse
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Access token lifetime in seconds")


class AccessTokenResponse(BaseModel):
    """Response schema for token refresh.

    ``refresh_token`` is only set when refresh token rotation is enabled.
    """

    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Access token lifetime in seconds")
