"""Authentication exceptions and error codes.

Every failure raised by the auth core carries a stable ``AuthErrorCode`` so
callers can branch on the kind of failure instead of message text. The
presentation layer maps codes to HTTP status codes; messages of internal
failures are never exposed to clients.
"""

from enum import Enum


class AuthErrorCode(str, Enum):
    """Closed set of failure kinds produced by the auth core.

    These codes are part of the public API contract. Should not be changed.
    """

    # Caller errors
    VALIDATION_FAILURE = "VALIDATION_FAILURE"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    NOT_FOUND = "NOT_FOUND"

    # Authentication rejected
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    EXPIRED = "EXPIRED"

    # Internal, non-recoverable per request
    SIGNING_FAILURE = "SIGNING_FAILURE"
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"
    HASHING_FAILURE = "HASHING_FAILURE"


INTERNAL_ERROR_CODES = frozenset(
    {
        AuthErrorCode.SIGNING_FAILURE,
        AuthErrorCode.PERSISTENCE_FAILURE,
        AuthErrorCode.HASHING_FAILURE,
    },
)


class AuthError(Exception):
    """Base exception for all authentication errors.

    Attributes
    ----------
    message
        Human-readable error message
    code
        Stable error code for programmatic handling
    cause
        The underlying exception, kept for diagnostics and logging
    """

    default_message = "Authentication error"
    default_code = AuthErrorCode.INVALID_CREDENTIALS

    def __init__(
        self,
        message: str | None = None,
        code: AuthErrorCode | None = None,
        cause: BaseException | None = None,
    ):
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.cause = cause
        super().__init__(self.message)

    @property
    def is_internal(self) -> bool:
        """True if the error must surface as a generic server error."""
        return self.code in INTERNAL_ERROR_CODES

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"cause={self.cause!r})"
        )


class ValidationError(AuthError):
    """Raised when caller input is missing or unusable."""

    default_message = "Invalid input"
    default_code = AuthErrorCode.VALIDATION_FAILURE


class InvalidCredentialsError(AuthError):
    """Raised when email or password is incorrect during login.

    The same error is used for unknown emails and wrong passwords so that
    account existence is never revealed.
    """

    default_message = "Invalid email or password"
    default_code = AuthErrorCode.INVALID_CREDENTIALS


class InvalidTokenError(AuthError):
    """Raised when a presented token is rejected."""

    default_message = "Invalid or expired token"
    default_code = AuthErrorCode.INVALID_TOKEN


class TokenVerificationError(AuthError):
    """Base class for failures reported by the token codec."""

    default_message = "Token verification failed"
    default_code = AuthErrorCode.INVALID_TOKEN


class InvalidSignatureError(TokenVerificationError):
    """Token signature does not match the configured secret."""

    default_message = "Token signature is invalid"
    default_code = AuthErrorCode.INVALID_SIGNATURE


class MalformedTokenError(TokenVerificationError):
    """Token structure or claim set deviates from the expected shape."""

    default_message = "Token is malformed"
    default_code = AuthErrorCode.MALFORMED_TOKEN


class TokenExpiredError(TokenVerificationError):
    """Token is past its embedded expiry."""

    default_message = "Token has expired"
    default_code = AuthErrorCode.EXPIRED


class RefreshTokenNotFoundError(InvalidTokenError):
    """Refresh token is unknown to the store (never issued, revoked or consumed)."""

    default_message = "Refresh token not found"
    default_code = AuthErrorCode.NOT_FOUND


class RefreshTokenExpiredError(InvalidTokenError):
    """Stored refresh token record is past its persisted expiry."""

    default_message = "Refresh token has expired"
    default_code = AuthErrorCode.EXPIRED


class SigningError(AuthError):
    """Raised when a token cannot be signed."""

    default_message = "Failed to sign token"
    default_code = AuthErrorCode.SIGNING_FAILURE


class PersistenceError(AuthError):
    """Raised when a store operation fails."""

    default_message = "Storage operation failed"
    default_code = AuthErrorCode.PERSISTENCE_FAILURE


class PasswordHashingError(AuthError):
    """Raised when a password cannot be hashed."""

    default_message = "Failed to hash password"
    default_code = AuthErrorCode.HASHING_FAILURE
