"""SQLAlchemy models for the application tables."""

from gymapp.infrastructure.persistence.sqlalchemy.models.base import Base, TimestampMixin
from gymapp.infrastructure.persistence.sqlalchemy.models.user_model import UserModel

__all__ = ["Base", "TimestampMixin", "UserModel"]
