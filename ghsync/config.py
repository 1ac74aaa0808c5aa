"""
Application configuration using Pydantic settings.

Usage:
    from ghsync.config import get_settings
    settings = get_settings()

For constants, import from ghsync.constants:
    from ghsync.constants import GITHUB_API_BASE, ERROR_MESSAGES
"""

import os
import warnings
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import GITHUB_API_BASE, GITHUB_OAUTH_SCOPES

# Values that must never be used as a session secret outside development
FORBIDDEN_SECRETS = [
    "CHANGE_ME",
    "changeme",
    "secret",
    "your-secret-key",
    "session-secret",
    "supersecret",
    "development",
    "test",
]


def _is_production_env() -> bool:
    return os.getenv("ENV", "development").lower() in ("production", "prod")


class Settings(BaseSettings):
    """
    Unified application settings loaded from environment variables and .env file.

    Required for production:
        - SESSION_SECRET (min 32 chars)
        - GITHUB_CLIENT_ID / GITHUB_CLIENT_SECRET (for OAuth)
        - TOKEN_ENCRYPTION_KEY (recommended, encrypts stored GitHub tokens)
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App settings
    app_name: str = "GitHub Integration"
    api_prefix: str = "/api"
    env: str = Field(default="development", validation_alias="ENV")
    debug: bool = Field(default=False, validation_alias="DEBUG")
    port: int = Field(default=3000, validation_alias="PORT")

    # Database
    database_url: str = Field(default="sqlite:///github_integration.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")
    db_create_tables: bool = Field(default=True, validation_alias="DB_CREATE_TABLES")

    # GitHub OAuth
    github_client_id: str = Field(default="", validation_alias="GITHUB_CLIENT_ID")
    github_client_secret: str = Field(default="", validation_alias="GITHUB_CLIENT_SECRET")
    github_callback_url: str = Field(
        default="http://localhost:3000/api/github/auth/github/callback",
        validation_alias="GITHUB_CALLBACK_URL",
    )
    github_scope: str = Field(default=" ".join(GITHUB_OAUTH_SCOPES))

    # GitHub REST API
    github_api_url: str = Field(default=GITHUB_API_BASE, validation_alias="GITHUB_API_URL")
    github_timeout_seconds: float = Field(default=30.0, validation_alias="GITHUB_TIMEOUT_SECONDS")

    # Session cookie
    session_secret: str = Field(default="CHANGE_ME", validation_alias="SESSION_SECRET")
    session_algorithm: str = Field(default="HS256")
    session_cookie_name: str = Field(default="github.sid", validation_alias="SESSION_COOKIE_NAME")
    session_max_age_seconds: int = Field(default=24 * 60 * 60, validation_alias="SESSION_MAX_AGE_SECONDS")
    oauth_state_ttl: int = Field(default=600, validation_alias="OAUTH_STATE_TTL")

    # Frontend redirects
    frontend_url: str = Field(default="http://localhost:4200", validation_alias="FRONTEND_URL")
    frontend_success_path: str = Field(default="/integration-success")
    frontend_error_path: str = Field(default="/integration-error")

    # CORS (falls back to the frontend URL when unset)
    cors_allowed_origins: str = Field(default="", validation_alias="CORS_ALLOWED_ORIGINS")

    # Token encryption (STRONGLY RECOMMENDED for production)
    # Generate with: python -c "from cryptography.fernet import Fernet; print(Fernet.generate_key().decode())"
    token_encryption_key: Optional[str] = Field(default=None, validation_alias="TOKEN_ENCRYPTION_KEY")
    require_encryption: bool = Field(default=False, validation_alias="REQUIRE_ENCRYPTION")
    strict_security: bool = Field(default=False, validation_alias="STRICT_SECURITY")

    @field_validator("session_secret")
    @classmethod
    def validate_session_secret(cls, v: str) -> str:
        """Validate session secret - warns in dev, errors in production."""
        is_forbidden = v.lower() in [fv.lower() for fv in FORBIDDEN_SECRETS]
        is_too_short = len(v) < 32

        if _is_production_env():
            if is_forbidden:
                raise ValueError(
                    f"SESSION_SECRET cannot be a default value ('{v}') in production. "
                    "Generate a secure key with: python -c \"import secrets; print(secrets.token_urlsafe(48))\""
                )
            if is_too_short:
                raise ValueError(
                    f"SESSION_SECRET must be at least 32 characters in production (got {len(v)})."
                )
        elif is_forbidden:
            warnings.warn(
                f"SESSION_SECRET is set to a default value ('{v}'). "
                "This is insecure - set a proper key for production.",
                UserWarning,
                stacklevel=2,
            )
        elif is_too_short:
            warnings.warn(
                f"SESSION_SECRET should be at least 32 characters (got {len(v)})",
                UserWarning,
                stacklevel=2,
            )

        return v

    @property
    def is_production(self) -> bool:
        return self.env.lower() in ("production", "prod")

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        raw = self.cors_allowed_origins or self.frontend_url
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    @property
    def frontend_success_url(self) -> str:
        return f"{self.frontend_url.rstrip('/')}{self.frontend_success_path}"

    @property
    def frontend_error_url(self) -> str:
        return f"{self.frontend_url.rstrip('/')}{self.frontend_error_path}"

    def validate_production_config(self) -> tuple[List[str], List[str]]:
        """
        Validate configuration for production deployment.

        Returns:
            Tuple of (errors, warnings) - errors are fatal, warnings are advisory
        """
        errors = []
        warnings_ = []

        if not self.github_client_id:
            errors.append("GITHUB_CLIENT_ID is required for OAuth")
        if not self.github_client_secret:
            errors.append("GITHUB_CLIENT_SECRET is required for OAuth")

        if not self.token_encryption_key:
            warnings_.append(
                "TOKEN_ENCRYPTION_KEY not set - GitHub access tokens will be stored "
                "in plaintext. Set this key to encrypt tokens at rest."
            )

        if self.strict_security:
            if not self.token_encryption_key:
                errors.append("TOKEN_ENCRYPTION_KEY required when STRICT_SECURITY=true")
            if any("localhost" in origin for origin in self.cors_origins_list):
                errors.append("CORS should not allow localhost in strict security mode")

        return errors, warnings_


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
