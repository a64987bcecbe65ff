"""SQLAlchemy model for issued refresh tokens."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from gymapp_auth.persistence.sqlalchemy.base import AuthBase


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class RefreshTokenModel(AuthBase):
    """
    SQLAlchemy model for refresh tokens.

    Many tokens per user are allowed. The token column is indexed but not
    unique: signing is deterministic, so two logins of the same user within
    one second yield the same token string.

    Table: refresh_tokens
    """

    __tablename__ = "refresh_tokens"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # User identifier (no FK to stay decoupled from user table)
    user_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
    )

    token: Mapped[str] = mapped_column(
        String(512),
        nullable=False,
        index=True,
    )

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
    )

    def __repr__(self) -> str:
        """String representation for debugging (never includes the token)."""
        return f"<RefreshTokenModel(id={self.id}, user_id={self.user_id})>"
