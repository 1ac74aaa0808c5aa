"""
Security configuration validation.

Ensures critical security settings are properly configured
before the application starts.
"""

import base64
import os
from dataclasses import dataclass

from ghsync.config import FORBIDDEN_SECRETS
from ghsync.logging import get_logger

logger = get_logger("security.validation")


class SecurityConfigError(Exception):
    """Raised when security configuration is invalid."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        message = "Security configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
        super().__init__(message)


@dataclass
class ValidationResult:
    """Result of security validation."""

    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_session_secret(secret: str) -> tuple[bool, str | None]:
    """
    Validate the session signing secret.

    Requirements:
    - Must be at least 32 characters
    - Must not be a default/placeholder value
    """
    if not secret:
        return False, "SESSION_SECRET is not set"

    if secret.lower() in [v.lower() for v in FORBIDDEN_SECRETS]:
        return False, f"SESSION_SECRET cannot be a default value like '{secret}'"

    if len(secret) < 32:
        return False, f"SESSION_SECRET must be at least 32 characters (got {len(secret)})"

    return True, None


def validate_encryption_key(key: str | None) -> tuple[bool, str | None]:
    """
    Validate encryption key for token storage.

    Must be a valid Fernet key (32 bytes, urlsafe base64, 44 characters).
    """
    if not key:
        return False, "TOKEN_ENCRYPTION_KEY is not set"

    if len(key) != 44:
        return False, f"TOKEN_ENCRYPTION_KEY must be 44 characters (got {len(key)})"

    try:
        decoded = base64.urlsafe_b64decode(key)
    except ValueError:
        return False, "TOKEN_ENCRYPTION_KEY is not valid base64"

    if len(decoded) != 32:
        return False, "TOKEN_ENCRYPTION_KEY is not a valid Fernet key"

    return True, None


def validate_cors_origins(origins: list[str]) -> tuple[bool, str | None, str | None]:
    """
    Validate CORS allowed origins.

    Returns:
        Tuple of (is_valid, error_message, warning_message)
    """
    if not origins:
        return False, "No CORS origins configured (set CORS_ALLOWED_ORIGINS or FRONTEND_URL)", None

    # Credentialed CORS cannot be combined with a wildcard origin
    if "*" in origins:
        return False, "CORS cannot allow all origins (*) when session cookies are used", None

    localhost_patterns = ["localhost", "127.0.0.1", "0.0.0.0"]
    has_localhost = any(
        any(pattern in origin for pattern in localhost_patterns) for origin in origins
    )
    if has_localhost and os.getenv("ENV") == "production":
        return (
            True,
            None,
            "CORS includes localhost origins - verify this is intentional in production",
        )

    return True, None, None


def validate_security_config(
    session_secret: str,
    encryption_key: str | None = None,
    cors_origins: list[str] | None = None,
    require_encryption: bool = False,
    strict: bool = False,
) -> ValidationResult:
    """
    Validate all security configuration.

    Raises:
        SecurityConfigError: On any error, or on warnings when strict=True
    """
    errors: list[str] = []
    warnings: list[str] = []

    valid, error = validate_session_secret(session_secret)
    if not valid and error:
        errors.append(error)

    if require_encryption or encryption_key:
        valid, error = validate_encryption_key(encryption_key)
        if not valid and error:
            if require_encryption:
                errors.append(error)
            else:
                warnings.append(f"Invalid encryption key: {error}")

    if cors_origins is not None:
        valid, error, warning = validate_cors_origins(cors_origins)
        if not valid and error:
            errors.append(error)
        if warning:
            warnings.append(warning)

    for error in errors:
        logger.error("config_validation_error", error=error)
    for warning in warnings:
        logger.warning("config_validation_warning", warning=warning)

    if errors or (strict and warnings):
        raise SecurityConfigError(errors + (warnings if strict else []))

    return ValidationResult(valid=True, errors=errors, warnings=warnings)


__all__ = [
    "SecurityConfigError",
    "ValidationResult",
    "validate_session_secret",
    "validate_encryption_key",
    "validate_cors_origins",
    "validate_security_config",
]
