"""Unit tests for PasswordHashingService."""

import pytest

from gymapp_auth.exceptions import (
    AuthErrorCode,
    PasswordHashingError,
    ValidationError,
)
from gymapp_auth.services import PasswordHashingService


class TestPasswordHashingService:
    """Tests for password hashing and verification."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = PasswordHashingService(rounds=4)  # Low rounds for fast tests

    def test_hash_returns_bcrypt_format(self):
        hashed = self.service.hash("secret123")

        # bcrypt hashes start with $2b$ or $2a$
        assert hashed.startswith("$2")
        assert len(hashed) == 60

    def test_hash_embeds_work_factor(self):
        hashed = self.service.hash("secret123")

        assert hashed.split("$")[2] == "04"

    def test_verify_correct_password(self):
        hashed = self.service.hash("my_secret_password")

        assert self.service.verify("my_secret_password", hashed) is True

    def test_verify_incorrect_password(self):
        hashed = self.service.hash("my_secret_password")

        assert self.service.verify("wrong_password", hashed) is False

    def test_verify_is_case_sensitive(self):
        hashed = self.service.hash("Secret123")

        assert self.service.verify("secret123", hashed) is False

    def test_verify_invalid_hash_returns_false(self):
        assert self.service.verify("password", "not_a_valid_hash") is False
        assert self.service.verify("password", "") is False

    def test_hash_produces_different_hashes(self):
        """Random salt: hashing twice differs, both verify."""
        hash1 = self.service.hash("same_password")
        hash2 = self.service.hash("same_password")

        assert hash1 != hash2
        assert self.service.verify("same_password", hash1)
        assert self.service.verify("same_password", hash2)

    def test_single_character_password_is_accepted(self):
        hashed = self.service.hash("x")

        assert self.service.verify("x", hashed)

    def test_unicode_password(self):
        password = "pässwörd-🔒"
        hashed = self.service.hash(password)

        assert self.service.verify(password, hashed)
        assert not self.service.verify("passwort-🔒", hashed)


class TestPasswordLimits:
    """Tests for inputs the hasher refuses."""

    def setup_method(self):
        self.service = PasswordHashingService(rounds=4)

    def test_empty_password_raises_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            self.service.hash("")

        assert exc_info.value.code == AuthErrorCode.VALIDATION_FAILURE

    def test_password_of_72_bytes_is_accepted(self):
        password = "a" * 72
        hashed = self.service.hash(password)

        assert self.service.verify(password, hashed)

    def test_password_over_72_bytes_raises(self):
        with pytest.raises(PasswordHashingError) as exc_info:
            self.service.hash("a" * 73)

        assert exc_info.value.code == AuthErrorCode.HASHING_FAILURE
        assert exc_info.value.is_internal

    def test_byte_length_counts_not_characters(self):
        # 37 two-byte characters are 74 bytes
        with pytest.raises(PasswordHashingError):
            self.service.hash("ä" * 37)
