"""SQLAlchemy model for User aggregate."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from gymapp.infrastructure.persistence.sqlalchemy.models.base import Base, TimestampMixin


class UserModel(Base, TimestampMixin):
    """
    SQLAlchemy model for persisting User aggregates.

    - id is assigned by the database on insert
    - email is unique (the real guard against duplicate registrations)
    - password_hash holds the bcrypt hash, never the plaintext

    Table: users
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Profile
    height: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    weight: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    goal: Mapped[str] = mapped_column(String(255), default="", nullable=False)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email})>"
