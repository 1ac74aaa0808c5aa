"""Credential store: one GitHub integration record per user."""

from datetime import datetime, timezone
from typing import Any

from ghsync.config import get_settings
from ghsync.github.types import GitHubProfile
from ghsync.logging import get_logger
from ghsync.models import GitHubIntegration
from ghsync.security.encryption import TokenEncryption, get_encryption_service

from .base import BaseRepository

logger = get_logger("repository.integration")


class IntegrationRepository(BaseRepository[GitHubIntegration]):
    """Repository for GitHub credential records, keyed by user id."""

    model = GitHubIntegration

    def __init__(self, session, encryption: TokenEncryption | None = None):
        super().__init__(session)
        self.encryption = encryption or get_encryption_service()

    def get_by_user_id(self, user_id: str) -> GitHubIntegration | None:
        """Get the live credential record for a user. Inactive records count as absent."""
        return self.get_one_where(user_id=user_id, is_active=True)

    def _encrypt_token(self, token: str) -> str:
        """
        Encrypt a GitHub token for storage.

        Falls back to plaintext if encryption is unavailable (unless REQUIRE_ENCRYPTION),
        but logs a warning for security auditing.
        """
        encrypted, was_encrypted = self.encryption.encrypt_if_available(
            token, require_encryption=get_settings().require_encryption
        )

        if not was_encrypted:
            logger.warning(
                "token_stored_unencrypted",
                message="GitHub token stored without encryption. Set TOKEN_ENCRYPTION_KEY for secure storage.",
            )

        return encrypted

    def get_decrypted_token(self, integration: GitHubIntegration) -> str | None:
        """
        Return the plaintext access token.

        None when the record has no token or it cannot be decrypted with the
        current key.
        """
        if not integration.access_token:
            return None
        return self.encryption.decrypt_if_encrypted(integration.access_token)

    def upsert_for_user(
        self,
        user_id: str,
        access_token: str,
        refresh_token: str | None = None,
        profile: GitHubProfile | None = None,
    ) -> GitHubIntegration:
        """
        Store the credential for a user, superseding any previous one.

        An existing record is updated in place: token, profile and connection
        time are replaced and the old snapshot is dropped. No history is kept.
        """
        now = datetime.now(timezone.utc)
        # Any record for the user, active or not, is superseded in place
        integration = self.get_one_where(user_id=user_id)
        is_new = integration is None

        if integration is None:
            integration = GitHubIntegration(user_id=user_id)
            self.session.add(integration)

        integration.access_token = self._encrypt_token(access_token)
        integration.refresh_token = self._encrypt_token(refresh_token) if refresh_token else None
        integration.github_id = profile.id if profile else None
        integration.github_username = profile.username if profile else None
        integration.display_name = profile.display_name if profile else None
        integration.email = profile.email if profile else None
        integration.avatar_url = profile.avatar_url if profile else None
        integration.data = None
        integration.last_sync_at = None
        integration.is_active = True
        integration.connected_at = now
        integration.updated_at = now

        self.session.flush()
        logger.info("integration_stored", user_id=user_id, created=is_new)
        return integration

    def save_snapshot(self, integration: GitHubIntegration, data: dict[str, Any]) -> GitHubIntegration:
        """Store the latest aggregation snapshot and mark the sync time."""
        now = datetime.now(timezone.utc)
        integration.data = data
        integration.last_sync_at = now
        integration.updated_at = now
        self.session.flush()
        return integration

    def delete_for_user(self, user_id: str) -> bool:
        """Delete the user's record. Returns False when there was nothing to delete."""
        return self.delete_where(user_id=user_id) > 0
