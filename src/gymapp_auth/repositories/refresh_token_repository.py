"""Abstract repository interface for refresh tokens.

This interface defines the contract for refresh token persistence.
Implementations can use SQLAlchemy, MongoDB, or any other storage.

The store is the source of truth for refresh token validity beyond the
signature check: a correctly signed token that is absent here is rejected.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class RefreshTokenData:
    """Immutable refresh token record returned by repository.

    Records are never mutated after creation; they are only deleted.
    """

    id: int
    user_id: int
    token: str
    expires_at: datetime
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Check the persisted expiry, which is authoritative."""
        return self.expires_at < now


class RefreshTokenRepository(ABC):
    """
    Abstract repository interface for issued refresh tokens.

    Example implementation:
        class RefreshTokenRepositorySQLAlchemy(RefreshTokenRepository):
            def __init__(self, session: AsyncSession):
                self._session = session

            async def create(self, user_id: int, token: str) -> RefreshTokenData:
                # SQLAlchemy-specific implementation
                ...
    """

    @abstractmethod
    async def create(self, user_id: int, token: str) -> RefreshTokenData:
        """
        Persist a newly issued refresh token.

        The repository assigns the record id and sets the expiry to a
        fixed horizon from now.

        Parameters
        ----------
        user_id
            The owning user's identifier
        token
            The signed refresh token string

        Returns
        -------
        The stored record

        Raises
        ------
        PersistenceError
            If the record cannot be written
        """

    @abstractmethod
    async def get_by_token(self, token: str) -> RefreshTokenData:
        """
        Look up a refresh token record by its token string.

        Raises
        ------
        RefreshTokenNotFoundError
            If no record exists for the token
        PersistenceError
            If the lookup fails
        """

    @abstractmethod
    async def delete_by_token(self, token: str) -> None:
        """
        Delete the record(s) for a token string.

        Raises
        ------
        RefreshTokenNotFoundError
            If no record exists for the token
        PersistenceError
            If the delete fails
        """

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """
        Remove all records whose expiry is before ``now``.

        Returns
        -------
        The number of removed records

        Raises
        ------
        PersistenceError
            If the delete fails
        """
