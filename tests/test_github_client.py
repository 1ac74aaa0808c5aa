"""Tests for the GitHub REST client against the fake API."""

import httpx
import pytest

from ghsync.constants import GITHUB_ACCEPT_HEADER, GITHUB_USER_AGENT
from ghsync.exceptions import ProviderError
from ghsync.github import GitHubClient

from .fakes import FAKE_API_URL, VALID_TOKEN


def test_requests_carry_token_and_v3_headers(github_client, fake_github):
    github_client.get_organizations()

    request = fake_github.requests[-1]
    assert request.headers["Authorization"] == f"Bearer {VALID_TOKEN}"
    assert request.headers["Accept"] == GITHUB_ACCEPT_HEADER
    assert request.headers["User-Agent"] == GITHUB_USER_AGENT


def test_resource_paths(github_client, fake_github):
    github_client.get_organizations()
    github_client.get_organization_repos("acme")
    github_client.get_organization_members("acme")
    github_client.get_repo_commits("acme", "api")
    github_client.get_repo_pulls("acme", "api")
    github_client.get_repo_issues("acme", "api")
    github_client.get_issue_comments("acme", "api", 7)

    assert fake_github.paths == [
        "/user/orgs",
        "/orgs/acme/repos",
        "/orgs/acme/members",
        "/repos/acme/api/commits",
        "/repos/acme/api/pulls",
        "/repos/acme/api/issues",
        "/repos/acme/api/issues/7/comments",
    ]


def test_returns_provider_json_untouched(github_client):
    repos = github_client.get_organization_repos("acme")

    assert repos == [
        {"name": "api", "full_name": "acme/api"},
        {"name": "web", "full_name": "acme/web"},
    ]


def test_validate_token_accepts_known_token(github_client):
    assert github_client.validate_token() is True


def test_validate_token_rejects_unknown_token(client_factory):
    with client_factory("tok_revoked") as client:
        assert client.validate_token() is False


def test_validate_token_treats_network_failure_as_rejected(github_client, fake_github):
    fake_github.disconnect("/user")

    assert github_client.validate_token() is False


def test_validate_token_never_retries(client_factory, fake_github):
    with client_factory("tok_revoked") as client:
        client.validate_token()

    assert fake_github.paths == ["/user"]


class TestProviderErrors:
    def test_non_success_carries_status_and_message(self, github_client, fake_github):
        fake_github.fail("/repos/acme/api/pulls", 403, "API rate limit exceeded")

        with pytest.raises(ProviderError) as exc_info:
            github_client.get_repo_pulls("acme", "api")

        error = exc_info.value
        assert error.provider_status == 403
        assert error.provider_message == "API rate limit exceeded"
        assert error.resource == "repo_pulls"
        assert error.params == {"owner": "acme", "repo": "api"}

    def test_transport_failure_has_no_status(self, github_client, fake_github):
        fake_github.disconnect("/user/orgs")

        with pytest.raises(ProviderError) as exc_info:
            github_client.get_organizations()

        assert exc_info.value.provider_status is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_rejected_token_raises_401(self, client_factory):
        with client_factory("tok_revoked") as client:
            with pytest.raises(ProviderError) as exc_info:
                client.get_organizations()

        assert exc_info.value.provider_status == 401
        assert exc_info.value.provider_message == "Bad credentials"

    def test_invalid_json_body(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>"))
        with GitHubClient(VALID_TOKEN, base_url=FAKE_API_URL, transport=transport) as client:
            with pytest.raises(ProviderError, match="Invalid JSON"):
                client.get_organizations()

    def test_non_json_error_body_falls_back_to_text(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(502, content=b"Bad gateway"))
        with GitHubClient(VALID_TOKEN, base_url=FAKE_API_URL, transport=transport) as client:
            with pytest.raises(ProviderError) as exc_info:
                client.get_organizations()

        assert exc_info.value.provider_status == 502
        assert exc_info.value.provider_message == "Bad gateway"


def test_path_segments_are_quoted(github_client, fake_github):
    github_client.get_repo_commits("acme", "my repo")

    assert fake_github.requests[-1].url.raw_path == b"/repos/acme/my%20repo/commits"
