"""User repository interface.

This is the credential store consumed by the authentication service.
"""

from abc import ABC, abstractmethod
from typing import Optional

from gymapp.domain.user.aggregates.user import User


class UserRepository(ABC):
    """Repository interface for User aggregates."""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        """
        Find a user by their ID.

        Parameters
        ----------
        user_id
            The user's numeric identifier

        Returns
        -------
        User if found, None otherwise
        """

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """
        Find a user by their email address.

        Matching is exact (case-sensitive, as stored).

        Parameters
        ----------
        email
            The user's email address

        Returns
        -------
        User if found, None otherwise
        """

    @abstractmethod
    async def save(self, user: User) -> User:
        """
        Save a user.

        A user without an id is inserted and returned with its assigned id.
        A persisted user only has its profile attributes updated; email and
        password hash are never rewritten.

        Parameters
        ----------
        user
            The user to save

        Returns
        -------
        The stored user

        Raises
        ------
        EmailAlreadyExistsError
            If the email is already in use (the store's uniqueness guard)
        UserNotFoundError
            If a persisted user no longer exists
        PersistenceError
            If the write fails for any other reason
        """
