"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gymapp.domain.shared.time import ensure_tz_aware
from gymapp.domain.user import (
    EmailAlreadyExistsError,
    User,
    UserNotFoundError,
    UserRepository,
)
from gymapp.infrastructure.persistence.sqlalchemy.models import UserModel
from gymapp_auth import PersistenceError

logger = logging.getLogger(__name__)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: int) -> Optional[User]:
        model = await self._find_model_by_id(user_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == email)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to get user", cause=e) from e
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def save(self, user: User) -> User:
        if not user.is_persisted:
            return await self._insert(user)

        model = await self._find_model_by_id(user.id)
        if model is None:
            raise UserNotFoundError(user.id)

        model.height = user.height
        model.weight = user.weight
        model.goal = user.goal
        model.updated_at = user.updated_at
        try:
            await self._session.flush()
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to update user", cause=e) from e

        logger.debug("Updated user profile: %s", user.id)
        return self._map_to_domain(model)

    async def _insert(self, user: User) -> User:
        model = UserModel(
            email=user.email,
            password_hash=user.password_hash,
            height=user.height,
            weight=user.weight,
            goal=user.goal,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        try:
            self._session.add(model)
            await self._session.flush()
        except IntegrityError as e:
            # Handle unique constraint violation on email
            if "unique" in str(e).lower() or "duplicate" in str(e).lower():
                raise EmailAlreadyExistsError(user.email, cause=e) from e
            raise PersistenceError("Failed to create user", cause=e) from e
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to create user", cause=e) from e

        logger.info("Created user: %s (email: %s)", model.id, model.email)
        return self._map_to_domain(model)

    async def _find_model_by_id(self, user_id: int) -> Optional[UserModel]:
        stmt = select(UserModel).where(UserModel.id == user_id)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to get user", cause=e) from e
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            height=model.height,
            weight=model.weight,
            goal=model.goal,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )
