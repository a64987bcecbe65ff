"""Unit tests for JWTService."""

import base64
import json
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from gymapp_auth.exceptions import (
    AuthErrorCode,
    InvalidSignatureError,
    MalformedTokenError,
    SigningError,
    TokenExpiredError,
    TokenVerificationError,
)
from gymapp_auth.services import JWTService

SECRET = "test-secret-key-0123456789abcdef0123456789abcdef"
OTHER_SECRET = "other-secret-key-0123456789abcdef0123456789abcd"

NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def _forge(payload: dict, secret: str = SECRET) -> str:
    """Sign an arbitrary payload with the same algorithm."""
    return jwt.encode(payload, secret, algorithm="HS256")


class TestJWTServiceInit:
    """Tests for JWTService initialization."""

    def test_init_with_valid_secret(self):
        service = JWTService(secret_key=SECRET)
        assert service is not None

    def test_init_with_empty_secret_raises(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            JWTService(secret_key="")


class TestIssue:
    """Tests for token signing."""

    def setup_method(self):
        self.service = JWTService(secret_key=SECRET, clock=lambda: NOW)

    def test_issue_returns_compact_token(self):
        token = self.service.issue(1, issued_at=NOW, expires_at=NOW + timedelta(minutes=15))

        assert isinstance(token, str)
        assert token.count(".") == 2

    def test_issue_is_deterministic(self):
        """Same subject and instants always yield the same string."""
        expires = NOW + timedelta(minutes=15)

        first = self.service.issue(42, issued_at=NOW, expires_at=expires)
        second = self.service.issue(42, issued_at=NOW, expires_at=expires)

        assert first == second

    def test_issue_differs_per_subject(self):
        expires = NOW + timedelta(minutes=15)

        assert self.service.issue(1, NOW, expires) != self.service.issue(2, NOW, expires)

    def test_issue_differs_per_secret(self):
        other = JWTService(secret_key=OTHER_SECRET)
        expires = NOW + timedelta(minutes=15)

        assert self.service.issue(1, NOW, expires) != other.issue(1, NOW, expires)

    def test_issue_accepts_unix_seconds(self):
        iat = int(NOW.timestamp())
        from_ints = self.service.issue(7, issued_at=iat, expires_at=iat + 900)
        from_datetimes = self.service.issue(
            7,
            issued_at=NOW,
            expires_at=NOW + timedelta(seconds=900),
        )

        assert from_ints == from_datetimes

    def test_payload_contains_exactly_three_integer_claims(self):
        token = self.service.issue(5, NOW, NOW + timedelta(minutes=15))

        payload_segment = token.split(".")[1]
        padded = payload_segment + "=" * (-len(payload_segment) % 4)
        payload = json.loads(base64.urlsafe_b64decode(padded))

        assert payload == {
            "sub": 5,
            "iat": int(NOW.timestamp()),
            "exp": int(NOW.timestamp()) + 900,
        }

    def test_unencodable_subject_raises_signing_error(self):
        with pytest.raises(SigningError) as exc_info:
            self.service.issue(object(), NOW, NOW + timedelta(minutes=15))

        assert exc_info.value.code == AuthErrorCode.SIGNING_FAILURE
        assert exc_info.value.is_internal


class TestVerify:
    """Tests for token verification."""

    def setup_method(self):
        self.service = JWTService(secret_key=SECRET, clock=lambda: NOW)
        self.expires = NOW + timedelta(minutes=15)
        self.token = self.service.issue(1, issued_at=NOW, expires_at=self.expires)

    def test_verify_valid_token(self):
        claims = self.service.verify(self.token)

        assert claims.subject == 1
        assert claims.issued_at == int(NOW.timestamp())
        assert claims.expires_at == int(self.expires.timestamp())
        assert claims.expires_at_datetime == self.expires

    def test_verify_uses_explicit_now(self):
        claims = self.service.verify(self.token, now=NOW + timedelta(minutes=14))

        assert claims.subject == 1

    def test_token_expires_at_exact_expiry(self):
        """Valid only while now is strictly before exp."""
        with pytest.raises(TokenExpiredError) as exc_info:
            self.service.verify(self.token, now=self.expires)

        assert exc_info.value.code == AuthErrorCode.EXPIRED

    def test_token_is_valid_one_second_before_expiry(self):
        claims = self.service.verify(self.token, now=self.expires - timedelta(seconds=1))

        assert claims.subject == 1

    def test_token_rejected_after_fifteen_minutes(self):
        with pytest.raises(TokenExpiredError):
            self.service.verify(self.token, now=NOW + timedelta(minutes=15, seconds=1))

    def test_verify_wrong_secret_raises(self):
        other = JWTService(secret_key=OTHER_SECRET, clock=lambda: NOW)

        with pytest.raises(InvalidSignatureError) as exc_info:
            other.verify(self.token)

        assert exc_info.value.code == AuthErrorCode.INVALID_SIGNATURE

    def test_signature_checked_before_expiry(self):
        other = JWTService(secret_key=OTHER_SECRET)

        with pytest.raises(InvalidSignatureError):
            other.verify(self.token, now=self.expires + timedelta(days=1))

    def test_verify_tampered_signature_raises(self):
        header, payload, signature = self.token.split(".")
        flipped = "A" if signature[0] != "A" else "B"
        tampered = f"{header}.{payload}.{flipped}{signature[1:]}"

        with pytest.raises(InvalidSignatureError):
            self.service.verify(tampered)

    def test_verify_tampered_payload_raises(self):
        forged = _forge({"sub": 2, "iat": 0, "exp": 2**31}, OTHER_SECRET)
        header, _, signature = self.token.split(".")
        _, forged_payload, _ = forged.split(".")

        with pytest.raises(InvalidSignatureError):
            self.service.verify(f"{header}.{forged_payload}.{signature}")

    @pytest.mark.parametrize("garbage", ["", "not-a-token", "invalid.token.string", "a.b"])
    def test_verify_garbage_raises_malformed(self, garbage):
        with pytest.raises(MalformedTokenError) as exc_info:
            self.service.verify(garbage)

        assert exc_info.value.code == AuthErrorCode.MALFORMED_TOKEN

    def test_rejects_unexpected_algorithm(self):
        token = jwt.encode(
            {"sub": 1, "iat": 0, "exp": 2**31},
            SECRET + "-hs512-padding-to-64-bytes-0123456789",
            algorithm="HS512",
        )

        with pytest.raises(TokenVerificationError):
            self.service.verify(token)

    def test_rejects_extra_claims(self):
        iat = int(NOW.timestamp())
        token = _forge({"sub": 1, "iat": iat, "exp": iat + 900, "role": "admin"})

        with pytest.raises(MalformedTokenError, match="Unexpected claim set"):
            self.service.verify(token)

    @pytest.mark.parametrize("missing", ["sub", "iat", "exp"])
    def test_rejects_missing_claims(self, missing):
        iat = int(NOW.timestamp())
        payload = {"sub": 1, "iat": iat, "exp": iat + 900}
        del payload[missing]

        with pytest.raises(MalformedTokenError):
            self.service.verify(_forge(payload))

    def test_rejects_string_subject(self):
        iat = int(NOW.timestamp())
        token = _forge({"sub": "1", "iat": iat, "exp": iat + 900})

        with pytest.raises(MalformedTokenError, match="'sub'"):
            self.service.verify(token)

    def test_rejects_boolean_subject(self):
        iat = int(NOW.timestamp())
        token = _forge({"sub": True, "iat": iat, "exp": iat + 900})

        with pytest.raises(MalformedTokenError):
            self.service.verify(token)

    def test_rejects_fractional_expiry(self):
        iat = int(NOW.timestamp())
        token = _forge({"sub": 1, "iat": iat, "exp": iat + 900.5})

        with pytest.raises(MalformedTokenError, match="'exp'"):
            self.service.verify(token)

    def test_codec_errors_keep_cause(self):
        other = JWTService(secret_key=OTHER_SECRET)

        with pytest.raises(InvalidSignatureError) as exc_info:
            other.verify(self.token)

        assert isinstance(exc_info.value.cause, jwt.InvalidSignatureError)
        assert exc_info.value.__cause__ is exc_info.value.cause
