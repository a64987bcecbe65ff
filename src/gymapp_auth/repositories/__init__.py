"""Repository interfaces for gymapp_auth.

This package defines abstract repository interfaces that can be implemented
by different persistence technologies (SQLAlchemy, MongoDB, etc.).
"""

from gymapp_auth.repositories.refresh_token_repository import (
    RefreshTokenData,
    RefreshTokenRepository,
)

__all__ = ["RefreshTokenData", "RefreshTokenRepository"]
