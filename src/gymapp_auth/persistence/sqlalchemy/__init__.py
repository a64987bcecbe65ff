"""SQLAlchemy implementation for gymapp_auth persistence.

Provides:
- AuthBase: Declarative base for auth models
- RefreshTokenModel: SQLAlchemy model for issued refresh tokens
- RefreshTokenRepositorySQLAlchemy: Repository implementation

Note: The consuming application should create AuthBase.metadata
to get the refresh_tokens table.
"""

from gymapp_auth.persistence.sqlalchemy.base import AuthBase
from gymapp_auth.persistence.sqlalchemy.models import RefreshTokenModel
from gymapp_auth.persistence.sqlalchemy.repositories import (
    RefreshTokenRepositorySQLAlchemy,
)

__all__ = [
    "AuthBase",
    "RefreshTokenModel",
    "RefreshTokenRepositorySQLAlchemy",
]
