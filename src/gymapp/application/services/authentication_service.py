"""Authentication service for registration, login and token lifecycle."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from gymapp.domain.shared.time import utc_now
from gymapp.domain.user import EmailAlreadyExistsError, User, UserNotFoundError
from gymapp_auth import (
    InvalidCredentialsError,
    InvalidTokenError,
    JWTService,
    PasswordHashingService,
    PersistenceError,
    RefreshTokenExpiredError,
    TokenClaims,
    TokenPair,
    TokenVerificationError,
    ValidationError,
)
from gymapp_auth.repositories import RefreshTokenRepository

if TYPE_CHECKING:
    from gymapp.domain.user import UserRepository

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates gymapp_auth infrastructure (password hashing, JWT tokens,
    refresh token storage) with the User domain to provide:
    - User registration and login
    - Token pair issuance
    - Access token validation
    - Access token refresh (optionally with refresh token rotation)
    - Logout and expired token cleanup

    The service holds no mutable state; all durable state lives in the
    repositories. It never retries: failures propagate immediately.
    """

    DEFAULT_ACCESS_TOKEN_TTL = timedelta(minutes=15)
    DEFAULT_REFRESH_TOKEN_TTL = timedelta(days=7)

    def __init__(  # NOQA: PLR0913
        self,
        user_repository: UserRepository,
        refresh_token_repository: RefreshTokenRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
        access_token_ttl: timedelta = DEFAULT_ACCESS_TOKEN_TTL,
        refresh_token_ttl: timedelta = DEFAULT_REFRESH_TOKEN_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._user_repo = user_repository
        self._refresh_token_repo = refresh_token_repository
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._access_token_ttl = access_token_ttl
        self._refresh_token_ttl = refresh_token_ttl
        self._clock = clock

    @property
    def access_token_expires_in(self) -> int:
        """Access token lifetime in seconds."""
        return int(self._access_token_ttl.total_seconds())

    def _issue_access_token(self, user_id: int, now: datetime) -> str:
        return self._jwt_service.issue(
            user_id,
            issued_at=now,
            expires_at=now + self._access_token_ttl,
        )

    async def register(self, email: str, password: str) -> User:
        if not email or not password:
            msg = "Email and password are required"
            raise ValidationError(msg)

        # Not atomic with the insert below; the repository's uniqueness
        # constraint turns a concurrent duplicate into EmailAlreadyExistsError.
        existing_user = await self._user_repo.find_by_email(email)
        if existing_user is not None:
            raise EmailAlreadyExistsError(email)

        password_hash = self._password_service.hash(password)
        user = await self._user_repo.save(User.create(email, password_hash))

        logger.info("User registered: %s (id: %s)", email, user.id)
        return user

    async def login(self, email: str, password: str) -> User:
        user = await self._user_repo.find_by_email(email)
        if user is None:
            raise InvalidCredentialsError

        if not self._password_service.verify(password, user.password_hash):
            raise InvalidCredentialsError

        logger.info("User logged in: %s", email)
        return user

    async def generate_tokens(self, user_id: int) -> TokenPair:
        """Issue an access/refresh token pair and persist the refresh token.

        If persisting fails the pair must be discarded; the refresh token
        would never be accepted.
        """
        return await self._issue_pair(user_id, self._clock())

    async def _issue_pair(self, user_id: int, issued_at: datetime) -> TokenPair:
        access_token = self._issue_access_token(user_id, issued_at)
        refresh_token = self._jwt_service.issue(
            user_id,
            issued_at=issued_at,
            expires_at=issued_at + self._refresh_token_ttl,
        )

        await self._refresh_token_repo.create(user_id=user_id, token=refresh_token)

        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self.access_token_expires_in,
        )

    def validate_token(self, token: str) -> int:
        """Return the user id of a valid access token.

        Only signature and expiry are checked; the refresh token store is
        not consulted.
        """
        try:
            claims = self._jwt_service.verify(token, now=self._clock())
        except TokenVerificationError as e:
            raise InvalidTokenError(f"Invalid token: {e.message}", cause=e) from e
        return claims.subject

    async def _verify_refresh_token(
        self,
        refresh_token: str,
        now: datetime,
    ) -> TokenClaims:
        try:
            claims = self._jwt_service.verify(refresh_token, now=now)
        except TokenVerificationError as e:
            msg = f"Invalid refresh token: {e.message}"
            raise InvalidTokenError(msg, cause=e) from e

        record = await self._refresh_token_repo.get_by_token(refresh_token)

        # The persisted expiry is authoritative, even if the signed claim
        # was issued under a different horizon.
        if record.is_expired(now):
            raise RefreshTokenExpiredError

        return claims

    async def refresh_access_token(self, refresh_token: str) -> str:
        """Exchange a stored refresh token for a new access token.

        The refresh token itself is neither rotated nor re-persisted.
        """
        now = self._clock()
        user_id = (await self._verify_refresh_token(refresh_token, now)).subject

        access_token = self._issue_access_token(user_id, now)
        logger.debug("Access token refreshed for user: %s", user_id)
        return access_token

    async def rotate_refresh_token(self, refresh_token: str) -> TokenPair:
        """Exchange a stored refresh token for a new pair, revoking the old one."""
        now = self._clock()
        claims = await self._verify_refresh_token(refresh_token, now)

        # Signing is deterministic per second; issuing strictly after the
        # consumed token guarantees the replacement is a different string.
        issued_at = max(
            now,
            datetime.fromtimestamp(claims.issued_at, tz=timezone.utc)
            + timedelta(seconds=1),
        )

        await self._refresh_token_repo.delete_by_token(refresh_token)
        pair = await self._issue_pair(claims.subject, issued_at)

        logger.debug("Refresh token rotated for user: %s", claims.subject)
        return pair

    async def logout(self, refresh_token: str) -> None:
        await self._refresh_token_repo.delete_by_token(refresh_token)
        logger.debug("Refresh token revoked")

    async def purge_expired_refresh_tokens(self) -> int:
        """Delete expired refresh tokens.

        Best effort: a storage failure is logged and reported as zero
        removed tokens instead of failing the caller.
        """
        try:
            return await self._refresh_token_repo.delete_expired(self._clock())
        except PersistenceError as e:
            logger.warning("Expired refresh token cleanup failed: %s", e.cause or e)
            return 0

    async def get_user(self, user_id: int) -> User:
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user
