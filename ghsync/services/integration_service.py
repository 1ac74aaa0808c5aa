"""
Integration Service - status, fetch, OAuth completion and removal.

Per user the integration is either Disconnected (no credential record) or
Connected (a record whose token GitHub last accepted). Every operation that
uses a stored token first checks it with GitHub and deletes the record when
GitHub rejects it (validate-or-evict), returning the user to Disconnected.
"""

import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy.orm import Session

from ghsync.exceptions import (
    IntegrationError,
    IntegrationNotFound,
    InvalidCredential,
    NoAccessToken,
)
from ghsync.github import AggregationResult, GitHubClient, GitHubProfile, aggregate
from ghsync.github.types import GitHubItem
from ghsync.identity import UserIdentity
from ghsync.logging import LogContext, get_logger
from ghsync.models import GitHubIntegration
from ghsync.repositories import IntegrationRepository

logger = get_logger("services.integration")

ClientFactory = Callable[[str], GitHubClient]


@dataclass
class IntegrationStatus:
    """Result of a status check."""

    connected: bool

    def to_dict(self) -> dict:
        return {"connected": self.connected}


class IntegrationService:
    """
    Orchestrates the credential store and the GitHub client for one request.

    Usage:
        service = IntegrationService(session)
        status = service.get_status(UserIdentity(user_id="583231"))

    The service commits at every state change (store, evict, remove, snapshot)
    so an eviction persists even though the request then fails.
    """

    def __init__(
        self,
        session: Session,
        client_factory: ClientFactory = GitHubClient,
        repository: IntegrationRepository | None = None,
    ):
        self.session = session
        self.client_factory = client_factory
        self.repository = repository or IntegrationRepository(session)

    # =========================================================================
    # Internals
    # =========================================================================

    @contextmanager
    def _operation(self, name: str, identity: UserIdentity) -> Iterator[None]:
        """Bind user/operation into the log context and log the outcome with its duration."""
        start = time.perf_counter()
        with LogContext(user_id=identity.user_id, operation=name):
            try:
                yield
            except Exception as e:
                duration = round(time.perf_counter() - start, 3)
                is_client_error = isinstance(e, IntegrationError) and e.status_code < 500
                log_method = logger.warning if is_client_error else logger.error
                log_method(
                    "integration_operation_failed",
                    duration_seconds=duration,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise
            logger.info(
                "integration_operation_complete",
                duration_seconds=round(time.perf_counter() - start, 3),
            )

    def _evict(self, identity: UserIdentity) -> None:
        """Delete a credential GitHub no longer accepts."""
        self.repository.delete_for_user(identity.user_id)
        self.session.commit()
        logger.warning("integration_evicted", reason="token_rejected")

    def _token_accepted(self, access_token: str) -> bool:
        with self.client_factory(access_token) as client:
            return client.validate_token()

    @contextmanager
    def _connected_client(
        self, identity: UserIdentity
    ) -> Iterator[tuple[GitHubIntegration, GitHubClient]]:
        """
        Yield the user's record and a client for its token.

        Raises:
            IntegrationNotFound: no record (or a record without a token)
            InvalidCredential: GitHub rejected the token; the record is evicted
        """
        integration = self.repository.get_by_user_id(identity.user_id)
        token = self.repository.get_decrypted_token(integration) if integration else None
        if not token:
            raise IntegrationNotFound()

        with self.client_factory(token) as client:
            if not client.validate_token():
                self._evict(identity)
                raise InvalidCredential()
            yield integration, client

    # =========================================================================
    # Operations
    # =========================================================================

    def get_status(self, identity: UserIdentity) -> IntegrationStatus:
        """
        Report whether the user has a working integration.

        A rejected token is evicted and reported as not connected. Provider
        failures never fail this call.
        """
        with self._operation("get_status", identity):
            integration = self.repository.get_by_user_id(identity.user_id)
            if integration is None:
                return IntegrationStatus(connected=False)

            token = self.repository.get_decrypted_token(integration)
            if not token or not self._token_accepted(token):
                self._evict(identity)
                return IntegrationStatus(connected=False)

            return IntegrationStatus(connected=True)

    def remove(self, identity: UserIdentity) -> bool:
        """Delete the user's credential. Idempotent; returns whether one existed."""
        with self._operation("remove", identity):
            removed = self.repository.delete_for_user(identity.user_id)
            self.session.commit()
            return removed

    def fetch_data(self, identity: UserIdentity) -> AggregationResult:
        """
        Run the full aggregation traversal and store its snapshot.

        Raises:
            IntegrationNotFound, InvalidCredential, FetchError
        """
        with self._operation("fetch_data", identity):
            with self._connected_client(identity) as (integration, client):
                result = aggregate(client)

            self.repository.save_snapshot(integration, result.to_dict())
            self.session.commit()
            return result

    def complete_oauth(
        self,
        identity: UserIdentity,
        access_token: str | None,
        refresh_token: str | None = None,
        profile: GitHubProfile | None = None,
    ) -> GitHubIntegration:
        """
        Store the credential issued by a successful OAuth callback.

        Raises:
            NoAccessToken: the callback produced no token
            InvalidCredential: GitHub does not accept the token
        """
        with self._operation("complete_oauth", identity):
            if not access_token:
                raise NoAccessToken()
            if not self._token_accepted(access_token):
                raise InvalidCredential()

            integration = self.repository.upsert_for_user(
                identity.user_id,
                access_token,
                refresh_token=refresh_token,
                profile=profile,
            )
            self.session.commit()
            return integration

    # Narrower fetches, gated the same way as fetch_data

    def list_organizations(self, identity: UserIdentity) -> list[GitHubItem]:
        with self._operation("list_organizations", identity):
            with self._connected_client(identity) as (_, client):
                return client.get_organizations()

    def list_organization_repos(self, identity: UserIdentity, org: str) -> list[GitHubItem]:
        with self._operation("list_organization_repos", identity):
            with self._connected_client(identity) as (_, client):
                return client.get_organization_repos(org)

    def list_organization_members(self, identity: UserIdentity, org: str) -> list[GitHubItem]:
        with self._operation("list_organization_members", identity):
            with self._connected_client(identity) as (_, client):
                return client.get_organization_members(org)

    def list_repo_commits(self, identity: UserIdentity, org: str, repo: str) -> list[GitHubItem]:
        with self._operation("list_repo_commits", identity):
            with self._connected_client(identity) as (_, client):
                return client.get_repo_commits(org, repo)

    def list_issue_comments(
        self, identity: UserIdentity, org: str, repo: str, issue_number: int
    ) -> list[GitHubItem]:
        with self._operation("list_issue_comments", identity):
            with self._connected_client(identity) as (_, client):
                return client.get_issue_comments(org, repo, issue_number)


__all__ = ["ClientFactory", "IntegrationService", "IntegrationStatus"]
