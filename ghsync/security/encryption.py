"""
Token encryption service using Fernet symmetric encryption.

Protects GitHub access and refresh tokens at rest in the credential store.
"""

from functools import lru_cache

from cryptography.fernet import Fernet, InvalidToken

from ghsync.config import get_settings
from ghsync.logging import get_logger

logger = get_logger("security.encryption")

# Every Fernet token starts with the base64 of its version byte and timestamp
FERNET_PREFIX = "gAAAAA"


class EncryptionError(Exception):
    """Raised when encryption/decryption fails."""

    pass


class TokenEncryption:
    """
    Fernet-based encryption for sensitive tokens.

    Fernet guarantees that data encrypted using it cannot be read
    or tampered with without the key (AES-128-CBC with HMAC).

    Usage:
        encryption = TokenEncryption(key)
        encrypted = encryption.encrypt("gho_xxxx...")
        decrypted = encryption.decrypt(encrypted)

    Without a key the service is unavailable and callers fall back to
    plaintext through encrypt_if_available / decrypt_if_encrypted.
    """

    def __init__(self, key: str | None = None):
        self._fernet: Fernet | None = None
        if not key:
            logger.warning("encryption_disabled", reason="TOKEN_ENCRYPTION_KEY not set")
            return

        try:
            self._fernet = Fernet(key.encode())
        except (ValueError, TypeError) as e:
            logger.error("encryption_init_failed", error=str(e), error_type=type(e).__name__)
            return

        logger.info("encryption_initialized")

    @property
    def is_available(self) -> bool:
        """Check if encryption is available."""
        return self._fernet is not None

    def encrypt(self, plaintext: str) -> str:
        """
        Encrypt a string value.

        Raises:
            EncryptionError: If encryption is unavailable
        """
        if self._fernet is None:
            raise EncryptionError("Encryption is not available")
        return self._fernet.encrypt(plaintext.encode()).decode()

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt an encrypted string.

        Raises:
            EncryptionError: If decryption fails or is unavailable
        """
        if self._fernet is None:
            raise EncryptionError("Encryption is not available")

        try:
            return self._fernet.decrypt(ciphertext.encode()).decode()
        except InvalidToken:
            logger.error("decrypt_invalid_token")
            raise EncryptionError("Invalid token - decryption failed") from None

    def encrypt_if_available(
        self, plaintext: str, require_encryption: bool = False
    ) -> tuple[str, bool]:
        """
        Encrypt if available, otherwise return the original value.

        Returns:
            Tuple of (result_string, was_encrypted)

        Raises:
            EncryptionError: If require_encryption is True and encryption is unavailable
        """
        if not self.is_available:
            if require_encryption:
                raise EncryptionError(
                    "Encryption is required but not available. "
                    "Set TOKEN_ENCRYPTION_KEY environment variable."
                )
            return plaintext, False

        return self.encrypt(plaintext), True

    def decrypt_if_encrypted(self, value: str) -> str | None:
        """
        Decrypt if the value looks like a Fernet token, otherwise return it unchanged.

        Tokens stored before a key was configured stay readable. A Fernet token
        that cannot be decrypted (key removed or rotated) yields None.
        """
        if not value.startswith(FERNET_PREFIX):
            return value

        try:
            return self.decrypt(value)
        except EncryptionError:
            logger.warning("stored_token_undecryptable")
            return None


@lru_cache(maxsize=1)
def get_encryption_service() -> TokenEncryption:
    """Get the process-wide TokenEncryption built from settings."""
    return TokenEncryption(get_settings().token_encryption_key)


__all__ = ["EncryptionError", "TokenEncryption", "get_encryption_service"]
