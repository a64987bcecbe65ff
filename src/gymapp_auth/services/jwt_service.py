"""JWT token service.

Signs and verifies the compact HS256 tokens used for both access and
refresh tokens. The service knows nothing about token lifetimes; callers
choose the expiry of each token they issue.
"""

from collections.abc import Callable
from datetime import datetime, timezone

import jwt

from gymapp_auth.exceptions import (
    InvalidSignatureError,
    MalformedTokenError,
    SigningError,
    TokenExpiredError,
)
from gymapp_auth.schemas import TokenClaims


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def _to_unix(moment: datetime | int) -> int:
    if isinstance(moment, datetime):
        return int(moment.timestamp())
    return int(moment)


class JWTService:
    """Service for JWT token creation and verification.

    Signing is deterministic: the same subject and instants always produce
    the same token string for a given secret.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.issue(1, issued_at=now, expires_at=now + timedelta(minutes=15))
    >>> claims = service.verify(token)
    >>> print(claims.subject)
    1
    """

    ALGORITHM = "HS256"

    # Signature and required claims are checked by PyJWT. Time-based checks
    # are done against the injected clock so that expiry is testable.
    _DECODE_OPTIONS = {
        "verify_signature": True,
        "verify_exp": False,
        "verify_iat": False,
        "verify_nbf": False,
        "verify_sub": False,
        "require": ["sub", "iat", "exp"],
    }

    def __init__(
        self,
        secret_key: str,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Shared secret for signing tokens. Must be kept secure.
        clock
            Returns the current instant; used when ``verify`` gets no ``now``
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._clock = clock

    def issue(
        self,
        subject: int,
        issued_at: datetime | int,
        expires_at: datetime | int,
    ) -> str:
        """Sign a token for ``subject``.

        Parameters
        ----------
        subject
            The user id
        issued_at
            Issuance instant (datetime or Unix seconds)
        expires_at
            Expiry instant (datetime or Unix seconds)

        Returns
        -------
        The encoded JWT token string

        Raises
        ------
        SigningError
            If the token cannot be encoded
        """
        claims = TokenClaims(
            subject=subject,
            issued_at=_to_unix(issued_at),
            expires_at=_to_unix(expires_at),
        )
        try:
            return jwt.encode(
                claims.to_payload(),
                self._secret_key,
                algorithm=self.ALGORITHM,
            )
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise SigningError(f"Failed to sign token: {e}", cause=e) from e

    def verify(self, token: str, now: datetime | None = None) -> TokenClaims:
        """Verify and decode a JWT token.

        The signature is checked first, then the claim shape, then that
        ``now`` is strictly before the ``exp`` claim.

        Parameters
        ----------
        token
            The JWT token string to verify
        now
            Instant to check expiry against (defaults to the clock)

        Returns
        -------
        TokenClaims containing the decoded data

        Raises
        ------
        InvalidSignatureError
            If the signature does not match the secret
        MalformedTokenError
            If the token or its claim set is structurally invalid
        TokenExpiredError
            If the token is past its expiry
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options=self._DECODE_OPTIONS,
            )
        except jwt.InvalidSignatureError as e:
            raise InvalidSignatureError(cause=e) from e
        except jwt.PyJWTError as e:
            raise MalformedTokenError(f"Malformed token: {e}", cause=e) from e

        claims = TokenClaims.from_payload(payload)

        if claims.is_expired(now or self._clock()):
            raise TokenExpiredError
        return claims
