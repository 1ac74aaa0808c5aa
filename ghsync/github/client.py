"""
GitHub REST API client.

One method per resource type. Every call sends the bearer token and the v3
Accept header, reads a single page and returns the provider's JSON. There is
no retry and no pagination.
"""

import time
from typing import Any
from urllib.parse import quote

import httpx

from ghsync.config import get_settings
from ghsync.constants import (
    GITHUB_ACCEPT_HEADER,
    GITHUB_USER_AGENT,
    RESOURCE_ISSUE_COMMENTS,
    RESOURCE_ORG_MEMBERS,
    RESOURCE_ORG_REPOS,
    RESOURCE_ORGANIZATIONS,
    RESOURCE_REPO_COMMITS,
    RESOURCE_REPO_ISSUES,
    RESOURCE_REPO_PULLS,
    RESOURCE_USER,
    RESOURCE_USER_EMAILS,
)
from ghsync.exceptions import ProviderError
from ghsync.logging import get_logger

from .types import GitHubItem

logger = get_logger("github.client")


def _segment(value: str | int) -> str:
    """Quote a single path segment (org, repo, owner)."""
    return quote(str(value), safe="")


def _error_message(response: httpx.Response) -> str:
    """Extract GitHub's error message, falling back to the raw body."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase


class GitHubClient:
    """
    Thin wrapper around the GitHub REST API for a single bearer token.

    Usage:
        with GitHubClient(access_token) as client:
            orgs = client.get_organizations()
            repos = client.get_organization_repos(orgs[0]["login"])

    Failed calls raise ProviderError carrying the HTTP status (None for
    transport failures) and GitHub's message.
    """

    def __init__(
        self,
        access_token: str,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        settings = get_settings()
        self._client = httpx.Client(
            base_url=base_url or settings.github_api_url,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": GITHUB_ACCEPT_HEADER,
                "User-Agent": GITHUB_USER_AGENT,
            },
            timeout=timeout or settings.github_timeout_seconds,
            transport=transport,
        )

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    def _get(self, path: str, resource: str, params: dict[str, Any] | None = None) -> Any:
        """GET a path and return its JSON body, raising ProviderError on failure."""
        params = params or {}
        start = time.perf_counter()

        try:
            response = self._client.get(path)
        except httpx.HTTPError as e:
            logger.error(
                "github_fetch_failed",
                resource=resource,
                params=params,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ProviderError(resource, params, None, str(e)) from e

        duration_ms = round((time.perf_counter() - start) * 1000, 1)

        if not response.is_success:
            message = _error_message(response)
            logger.error(
                "github_fetch_failed",
                resource=resource,
                params=params,
                status=response.status_code,
                message=message,
                duration_ms=duration_ms,
            )
            raise ProviderError(resource, params, response.status_code, message)

        try:
            data = response.json()
        except ValueError as e:
            logger.error("github_invalid_json", resource=resource, params=params)
            raise ProviderError(resource, params, response.status_code, "Invalid JSON response") from e

        logger.info(
            "github_fetch",
            resource=resource,
            params=params,
            count=len(data) if isinstance(data, list) else 1,
            duration_ms=duration_ms,
        )
        return data

    # Identity

    def get_authenticated_user(self) -> dict[str, Any]:
        """The user the token belongs to."""
        return self._get("/user", RESOURCE_USER)

    def get_user_emails(self) -> list[GitHubItem]:
        """Email addresses of the authenticated user (needs ``user:email``)."""
        return self._get("/user/emails", RESOURCE_USER_EMAILS)

    def validate_token(self) -> bool:
        """
        Check whether GitHub still accepts the token.

        Any non-success response, including a network failure, counts as
        rejected. Never raises and never retries.
        """
        try:
            self.get_authenticated_user()
        except ProviderError as e:
            logger.warning(
                "github_token_rejected",
                status=e.provider_status,
                message=e.provider_message,
            )
            return False
        return True

    # Organizations

    def get_organizations(self) -> list[GitHubItem]:
        return self._get("/user/orgs", RESOURCE_ORGANIZATIONS)

    def get_organization_repos(self, org: str) -> list[GitHubItem]:
        return self._get(f"/orgs/{_segment(org)}/repos", RESOURCE_ORG_REPOS, {"org": org})

    def get_organization_members(self, org: str) -> list[GitHubItem]:
        return self._get(f"/orgs/{_segment(org)}/members", RESOURCE_ORG_MEMBERS, {"org": org})

    # Repositories

    def get_repo_commits(self, owner: str, repo: str) -> list[GitHubItem]:
        return self._get(
            f"/repos/{_segment(owner)}/{_segment(repo)}/commits",
            RESOURCE_REPO_COMMITS,
            {"owner": owner, "repo": repo},
        )

    def get_repo_pulls(self, owner: str, repo: str) -> list[GitHubItem]:
        return self._get(
            f"/repos/{_segment(owner)}/{_segment(repo)}/pulls",
            RESOURCE_REPO_PULLS,
            {"owner": owner, "repo": repo},
        )

    def get_repo_issues(self, owner: str, repo: str) -> list[GitHubItem]:
        return self._get(
            f"/repos/{_segment(owner)}/{_segment(repo)}/issues",
            RESOURCE_REPO_ISSUES,
            {"owner": owner, "repo": repo},
        )

    def get_issue_comments(self, owner: str, repo: str, issue_number: int) -> list[GitHubItem]:
        return self._get(
            f"/repos/{_segment(owner)}/{_segment(repo)}/issues/{_segment(issue_number)}/comments",
            RESOURCE_ISSUE_COMMENTS,
            {"owner": owner, "repo": repo, "issue_number": issue_number},
        )


__all__ = ["GitHubClient"]
