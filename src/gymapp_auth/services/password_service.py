"""Password hashing service using bcrypt.

Provides salted one-way password hashing and constant-time verification.
"""

import bcrypt

from gymapp_auth.exceptions import PasswordHashingError, ValidationError


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt with a fixed work factor. The random salt is embedded in
    the produced hash, so no separate salt storage is needed.

    Examples
    --------
    >>> service = PasswordHashingService()
    >>> hash = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", hash)
    True
    >>> service.verify("wrong_password", hash)
    False
    """

    # bcrypt only considers the first 72 bytes of input
    MAX_PASSWORD_BYTES = 72

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12,
            which is a good balance of security and performance.
        """
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The bcrypt hash as a string

        Raises
        ------
        ValidationError
            If password is empty
        PasswordHashingError
            If the password cannot be hashed (e.g. longer than 72 bytes)
        """
        if not password:
            msg = "Password cannot be empty"
            raise ValidationError(msg)

        encoded = password.encode("utf-8")
        if len(encoded) > self.MAX_PASSWORD_BYTES:
            msg = f"Password cannot exceed {self.MAX_PASSWORD_BYTES} bytes"
            raise PasswordHashingError(msg)

        try:
            salt = bcrypt.gensalt(rounds=self._rounds)
            hashed = bcrypt.hashpw(encoded, salt)
        except (ValueError, TypeError) as e:
            raise PasswordHashingError(cause=e) from e
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        The comparison runs in constant time with respect to the guess.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The bcrypt hash to verify against

        Returns
        -------
        True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format or over-long password
            return False
