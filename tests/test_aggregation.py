"""Tests for the organization -> repository -> activity traversal."""

import httpx
import pytest

from ghsync.exceptions import FetchError, ProviderError
from ghsync.github import GitHubClient, aggregate

from .fakes import FakeGitHub


def _client_for(fake: FakeGitHub) -> GitHubClient:
    return GitHubClient(
        "tok_valid",
        base_url="https://api.github.test",
        transport=httpx.MockTransport(fake.handler),
    )


@pytest.mark.parametrize(
    "orgs, repos_per_org, items_per_repo",
    [(1, 1, 1), (2, 3, 4), (3, 2, 0)],
)
def test_totals_match_uniform_tree(orgs, repos_per_org, items_per_repo):
    fake = FakeGitHub.uniform(orgs, repos_per_org, items_per_repo)

    with _client_for(fake) as client:
        result = aggregate(client)

    assert len(result.organizations) == orgs
    assert result.total_repos == orgs * repos_per_org
    assert result.total_commits == orgs * repos_per_org * items_per_repo
    assert result.total_pulls == orgs * repos_per_org * items_per_repo
    assert result.total_issues == orgs * repos_per_org * items_per_repo


def test_totals_equal_sum_over_tree():
    fake = FakeGitHub(repos={"acme": ["api", "web", "docs"], "globex": ["core"]}, commits=5, pulls=1, issues=2)

    with _client_for(fake) as client:
        result = aggregate(client)

    repos = [repo for org in result.organizations for repo in org.repos]
    assert result.total_repos == len(repos) == 4
    assert result.total_commits == sum(len(repo.commits) for repo in repos) == 20
    assert result.total_pulls == sum(len(repo.pulls) for repo in repos) == 4
    assert result.total_issues == sum(len(repo.issues) for repo in repos) == 8


def test_preserves_provider_order():
    fake = FakeGitHub(repos={"zeta": ["b", "a"], "alpha": ["y", "x"]})

    with _client_for(fake) as client:
        result = aggregate(client)

    assert [org.name for org in result.organizations] == ["zeta", "alpha"]
    assert [repo.name for repo in result.organizations[0].repos] == ["b", "a"]
    assert [repo.name for repo in result.organizations[1].repos] == ["y", "x"]


def test_no_organizations_gives_empty_result():
    fake = FakeGitHub(repos={})

    with _client_for(fake) as client:
        result = aggregate(client)

    assert result.to_dict() == {
        "organizations": [],
        "totalRepos": 0,
        "totalCommits": 0,
        "totalPulls": 0,
        "totalIssues": 0,
    }


def test_organization_without_repositories_is_kept():
    fake = FakeGitHub(repos={"empty-org": []})

    with _client_for(fake) as client:
        result = aggregate(client)

    assert [org.name for org in result.organizations] == ["empty-org"]
    assert result.organizations[0].repos == []
    assert result.total_repos == 0


def test_call_sequence_is_sequential_per_repository():
    fake = FakeGitHub(repos={"acme": ["api", "web"]})

    with _client_for(fake) as client:
        aggregate(client)

    assert fake.paths == [
        "/user/orgs",
        "/orgs/acme/repos",
        "/repos/acme/api/commits",
        "/repos/acme/api/pulls",
        "/repos/acme/api/issues",
        "/repos/acme/web/commits",
        "/repos/acme/web/pulls",
        "/repos/acme/web/issues",
    ]


class TestAbortOnFailure:
    def test_failure_in_second_repository_aborts_whole_traversal(self):
        fake = FakeGitHub(repos={"acme": ["api", "web", "docs"]})
        fake.fail("/repos/acme/web/pulls", 502, "Bad Gateway")

        with _client_for(fake) as client:
            with pytest.raises(FetchError) as exc_info:
                aggregate(client)

        error = exc_info.value
        assert error.resource == "repo_pulls"
        assert error.params == {"owner": "acme", "repo": "web"}
        assert isinstance(error.__cause__, ProviderError)
        assert error.__cause__.provider_status == 502
        # Nothing after the failing call is requested
        assert fake.paths[-1] == "/repos/acme/web/pulls"
        assert "/repos/acme/docs/commits" not in fake.paths

    def test_failure_listing_organizations(self):
        fake = FakeGitHub(repos={"acme": ["api"]})
        fake.fail("/user/orgs", 500)

        with _client_for(fake) as client:
            with pytest.raises(FetchError) as exc_info:
                aggregate(client)

        assert exc_info.value.resource == "organizations"
        assert str(exc_info.value) == "Failed to fetch organizations"

    def test_error_names_failing_organization(self):
        fake = FakeGitHub(repos={"acme": ["api"], "globex": ["core"]})
        fake.disconnect("/orgs/globex/repos")

        with _client_for(fake) as client:
            with pytest.raises(FetchError) as exc_info:
                aggregate(client)

        assert exc_info.value.params == {"org": "globex"}
        assert str(exc_info.value) == "Failed to fetch organization_repos (org=globex)"

    def test_repository_without_name_is_fetch_error(self):
        fake = FakeGitHub(repos={"acme": ["api"]})
        fake.serve("/orgs/acme/repos", [{"full_name": "acme/api"}])

        with _client_for(fake) as client:
            with pytest.raises(FetchError) as exc_info:
                aggregate(client)

        assert exc_info.value.resource == "organization_repos"
        assert exc_info.value.params == {"org": "acme"}
        assert not any(path.startswith("/repos/") for path in fake.paths)

    def test_organization_without_login_is_fetch_error(self):
        fake = FakeGitHub(repos={"acme": ["api"]})
        fake.serve("/user/orgs", [{"id": 1}])

        with _client_for(fake) as client:
            with pytest.raises(FetchError) as exc_info:
                aggregate(client)

        assert exc_info.value.resource == "organizations"
        assert exc_info.value.__cause__ is None
