"""
Security module for the GitHub integration.

Provides:
- Token encryption (Fernet)
- Configuration validation
"""

from .encryption import EncryptionError, TokenEncryption, get_encryption_service
from .validation import SecurityConfigError, validate_security_config

__all__ = [
    "EncryptionError",
    "TokenEncryption",
    "get_encryption_service",
    "validate_security_config",
    "SecurityConfigError",
]
