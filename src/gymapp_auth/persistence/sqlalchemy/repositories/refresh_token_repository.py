"""SQLAlchemy implementation of RefreshTokenRepository.

Provides data access for RefreshTokenModel. Storage errors are wrapped in
PersistenceError with the original exception kept as the cause.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gymapp_auth.exceptions import PersistenceError, RefreshTokenNotFoundError
from gymapp_auth.persistence.sqlalchemy.models import RefreshTokenModel
from gymapp_auth.repositories import RefreshTokenData, RefreshTokenRepository

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def _as_utc(dt: datetime) -> datetime:
    # SQLite drops tzinfo on the way back; stored values are always UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class RefreshTokenRepositorySQLAlchemy(RefreshTokenRepository):
    """
    SQLAlchemy implementation of RefreshTokenRepository.

    The expiry of each record is computed here from ``token_ttl`` at
    creation time and never extended afterwards.
    """

    DEFAULT_TOKEN_TTL = timedelta(days=7)

    def __init__(
        self,
        session: AsyncSession,
        token_ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize repository with database session.

        Parameters
        ----------
        session
            SQLAlchemy async session
        token_ttl
            Horizon from creation to expiry for stored tokens
        clock
            Returns the current instant
        """
        self._session = session
        self._token_ttl = token_ttl
        self._clock = clock

    def _to_data(self, model: RefreshTokenModel) -> RefreshTokenData:
        """Map SQLAlchemy model to data transfer object."""
        return RefreshTokenData(
            id=model.id,
            user_id=model.user_id,
            token=model.token,
            expires_at=_as_utc(model.expires_at),
            created_at=_as_utc(model.created_at),
        )

    async def create(self, user_id: int, token: str) -> RefreshTokenData:
        now = _as_utc(self._clock())
        model = RefreshTokenModel(
            user_id=user_id,
            token=token,
            expires_at=now + self._token_ttl,
            created_at=now,
        )
        try:
            self._session.add(model)
            await self._session.flush()
        except SQLAlchemyError as e:
            msg = f"Failed to create refresh token for user {user_id}"
            raise PersistenceError(msg, cause=e) from e

        logger.debug("Stored refresh token %s for user: %s", model.id, user_id)
        return self._to_data(model)

    async def get_by_token(self, token: str) -> RefreshTokenData:
        # Identical token strings may exist; the newest record wins
        stmt = (
            select(RefreshTokenModel)
            .where(RefreshTokenModel.token == token)
            .order_by(RefreshTokenModel.id.desc())
            .limit(1)
        )
        try:
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to get refresh token", cause=e) from e

        if model is None:
            raise RefreshTokenNotFoundError
        return self._to_data(model)

    async def delete_by_token(self, token: str) -> None:
        stmt = (
            delete(RefreshTokenModel)
            .where(RefreshTokenModel.token == token)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to delete refresh token", cause=e) from e

        if result.rowcount == 0:
            raise RefreshTokenNotFoundError
        logger.debug("Deleted %d refresh token record(s)", result.rowcount)

    async def delete_expired(self, now: datetime) -> int:
        stmt = (
            delete(RefreshTokenModel)
            .where(RefreshTokenModel.expires_at < _as_utc(now))
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to delete expired tokens", cause=e) from e

        if result.rowcount:
            logger.info("Deleted %d expired refresh token(s)", result.rowcount)
        return result.rowcount
