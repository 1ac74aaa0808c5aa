"""Tests for startup security validation."""

import pytest
from cryptography.fernet import Fernet

from ghsync.security import SecurityConfigError, validate_security_config
from ghsync.security.validation import (
    validate_cors_origins,
    validate_encryption_key,
    validate_session_secret,
)

GOOD_SECRET = "s" * 16 + "3cr3t-value-for-sessions"


class TestSessionSecret:
    def test_accepts_long_random_secret(self):
        assert validate_session_secret(GOOD_SECRET) == (True, None)

    @pytest.mark.parametrize("secret", ["", "CHANGE_ME", "changeme", "secret"])
    def test_rejects_empty_or_default(self, secret):
        valid, error = validate_session_secret(secret)

        assert valid is False
        assert "SESSION_SECRET" in error

    def test_rejects_short_secret(self):
        valid, error = validate_session_secret("short-but-not-default")

        assert valid is False
        assert "at least 32 characters" in error


class TestEncryptionKey:
    def test_accepts_fernet_key(self):
        assert validate_encryption_key(Fernet.generate_key().decode()) == (True, None)

    def test_rejects_wrong_length(self):
        valid, error = validate_encryption_key("abc")

        assert valid is False
        assert "44 characters" in error

    def test_missing_key(self):
        assert validate_encryption_key(None) == (False, "TOKEN_ENCRYPTION_KEY is not set")


class TestCorsOrigins:
    def test_rejects_wildcard(self):
        valid, error, _ = validate_cors_origins(["*"])

        assert valid is False
        assert "*" in error

    def test_rejects_empty(self):
        valid, _, _ = validate_cors_origins([])

        assert valid is False

    def test_accepts_explicit_origin(self):
        assert validate_cors_origins(["https://app.example.com"]) == (True, None, None)


def test_valid_config_passes():
    result = validate_security_config(
        session_secret=GOOD_SECRET,
        cors_origins=["https://app.example.com"],
    )

    assert result.valid is True
    assert result.errors == []


def test_errors_raise_security_config_error():
    with pytest.raises(SecurityConfigError) as exc_info:
        validate_security_config(session_secret="CHANGE_ME", cors_origins=["*"])

    assert len(exc_info.value.errors) == 2


def test_required_encryption_needs_a_key():
    with pytest.raises(SecurityConfigError):
        validate_security_config(session_secret=GOOD_SECRET, require_encryption=True)


def test_invalid_optional_key_is_only_a_warning():
    result = validate_security_config(session_secret=GOOD_SECRET, encryption_key="bad")

    assert result.valid is True
    assert len(result.warnings) == 1


def test_strict_mode_promotes_warnings():
    with pytest.raises(SecurityConfigError):
        validate_security_config(session_secret=GOOD_SECRET, encryption_key="bad", strict=True)
