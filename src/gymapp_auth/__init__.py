"""GymApp Auth - Generic authentication infrastructure.

This package provides authentication infrastructure that is independent
of any specific application domain. It handles:
- Password hashing (bcrypt)
- JWT token signing and verification
- Refresh token storage (with pluggable persistence)

Architecture:
    gymapp_auth/
    ├── services/           # Pure logic (password hashing, JWT)
    ├── repositories/       # Abstract interfaces
    ├── persistence/        # Implementations by technology
    │   └── sqlalchemy/     # SQLAlchemy implementation
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions and error codes
"""

from gymapp_auth.exceptions import (
    AuthError,
    AuthErrorCode,
    InvalidCredentialsError,
    InvalidSignatureError,
    InvalidTokenError,
    MalformedTokenError,
    PasswordHashingError,
    PersistenceError,
    RefreshTokenExpiredError,
    RefreshTokenNotFoundError,
    SigningError,
    TokenExpiredError,
    TokenVerificationError,
    ValidationError,
)
from gymapp_auth.repositories import RefreshTokenData, RefreshTokenRepository
from gymapp_auth.schemas import TokenClaims, TokenPair
from gymapp_auth.services import JWTService, PasswordHashingService

__all__ = [
    # Services
    "PasswordHashingService",
    "JWTService",
    # Repositories (interfaces)
    "RefreshTokenData",
    "RefreshTokenRepository",
    # Schemas
    "TokenClaims",
    "TokenPair",
    # Exceptions
    "AuthError",
    "AuthErrorCode",
    "ValidationError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "TokenVerificationError",
    "InvalidSignatureError",
    "MalformedTokenError",
    "TokenExpiredError",
    "RefreshTokenNotFoundError",
    "RefreshTokenExpiredError",
    "SigningError",
    "PersistenceError",
    "PasswordHashingError",
]
