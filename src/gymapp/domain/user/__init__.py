"""User domain - manages user identity and profile.

Design notes:
- User ID is a numeric identifier assigned by the repository on creation
- Email is unique and matched exactly
- The password hash is produced by the auth package and stored as is
- Repository interface defined here, implementation in infrastructure
"""

from gymapp.domain.user.aggregates import User
from gymapp.domain.user.exceptions import EmailAlreadyExistsError, UserNotFoundError
from gymapp.domain.user.repositories import UserRepository

__all__ = [
    "EmailAlreadyExistsError",
    "User",
    "UserNotFoundError",
    "UserRepository",
]
