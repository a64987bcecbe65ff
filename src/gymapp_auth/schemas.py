"""Auth schemas and data structures.

These are simple data classes used for transferring token data
between components.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from gymapp_auth.exceptions import MalformedTokenError


def _is_int(value: Any) -> bool:
    # bool is an int subclass; a JSON true/false must not pass as a claim
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class TokenClaims:
    """Decoded claim set of a signed token.

    Tokens carry exactly three integer claims: ``sub`` (user id), ``iat``
    and ``exp`` (Unix seconds). Any other shape is rejected.

    Attributes
    ----------
    subject
        The user id the token was issued for
    issued_at
        Issuance instant in Unix seconds
    expires_at
        Expiry instant in Unix seconds
    """

    subject: int
    issued_at: int
    expires_at: int

    CLAIM_NAMES = frozenset({"sub", "iat", "exp"})

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TokenClaims":
        """Build claims from a decoded payload, enforcing the exact shape.

        Raises
        ------
        MalformedTokenError
            If claims are missing, unexpected or not integers
        """
        if set(payload) != cls.CLAIM_NAMES:
            msg = f"Unexpected claim set: {sorted(payload)}"
            raise MalformedTokenError(msg)

        for name in ("sub", "iat", "exp"):
            if not _is_int(payload[name]):
                msg = f"Claim '{name}' must be an integer"
                raise MalformedTokenError(msg)

        return cls(
            subject=payload["sub"],
            issued_at=payload["iat"],
            expires_at=payload["exp"],
        )

    def to_payload(self) -> dict[str, int]:
        return {"sub": self.subject, "iat": self.issued_at, "exp": self.expires_at}

    @property
    def expires_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.expires_at, tz=timezone.utc)

    def is_expired(self, now: datetime) -> bool:
        """Valid only while ``now`` is strictly before ``exp``."""
        return int(now.timestamp()) >= self.expires_at


@dataclass(frozen=True)
class TokenPair:
    """Access and refresh token issued together for one user."""

    access_token: str
    refresh_token: str
    expires_in: int  # access token lifetime in seconds
