from datetime import datetime
from typing import Optional

from gymapp.domain.shared.time import utc_now


class User:
    """
    User aggregate root.

    Holds identity (id, email), the password hash and profile attributes.
    The id is assigned by the repository on first save and never changes.
    Only profile attributes are mutable.
    """

    def __init__(  # NOQA: PLR0913
        self,
        email: str,
        password_hash: str,
        id: Optional[int] = None,
        height: int = 0,
        weight: int = 0,
        goal: str = "",
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._id = id
        self._email = email
        self._password_hash = password_hash
        self._height = height
        self._weight = weight
        self._goal = goal
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def email(self) -> str:
        return self._email

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def height(self) -> int:
        return self._height

    @property
    def weight(self) -> int:
        return self._weight

    @property
    def goal(self) -> str:
        return self._goal

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def is_persisted(self) -> bool:
        return self._id is not None

    def update_profile(
        self,
        height: Optional[int] = None,
        weight: Optional[int] = None,
        goal: Optional[str] = None,
    ):
        # Only provided (non-None) values are updated; others are preserved.
        if height is not None:
            self._height = height
        if weight is not None:
            self._weight = weight
        if goal is not None:
            self._goal = goal
        self._updated_at = utc_now()

    @classmethod
    def create(cls, email: str, password_hash: str) -> "User":
        return cls(email=email, password_hash=password_hash)

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: int,
        email: str,
        password_hash: str,
        height: int,
        weight: int,
        goal: str,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            email=email,
            password_hash=password_hash,
            height=height,
            weight=weight,
            goal=goal,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id is not None and self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email!r})"
