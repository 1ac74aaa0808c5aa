"""Type definitions for GitHub data returned by the integration."""

from dataclasses import dataclass, field
from typing import Any

# Raw GitHub list responses are passed through untouched
GitHubItem = dict[str, Any]


@dataclass
class GitHubProfile:
    """Minimal profile snapshot stored with a credential."""

    id: str
    username: str | None = None
    display_name: str | None = None
    email: str | None = None
    avatar_url: str | None = None

    @classmethod
    def from_api(cls, user: dict[str, Any], email: str | None = None) -> "GitHubProfile":
        """Build from a GitHub ``/user`` payload, preferring an explicit primary email."""
        return cls(
            id=str(user.get("id") or ""),
            username=user.get("login"),
            display_name=user.get("name"),
            email=email or user.get("email"),
            avatar_url=user.get("avatar_url"),
        )


@dataclass
class RepositoryData:
    """One repository and its commits, pulls and issues."""

    name: str
    commits: list[GitHubItem] = field(default_factory=list)
    pulls: list[GitHubItem] = field(default_factory=list)
    issues: list[GitHubItem] = field(default_factory=list)

    @property
    def commit_count(self) -> int:
        return len(self.commits)

    @property
    def pull_count(self) -> int:
        return len(self.pulls)

    @property
    def issue_count(self) -> int:
        return len(self.issues)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "commits": self.commits,
            "pulls": self.pulls,
            "issues": self.issues,
        }


@dataclass
class OrganizationData:
    """One organization and its repositories, in provider order."""

    name: str
    repos: list[RepositoryData] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "repos": [repo.to_dict() for repo in self.repos]}


@dataclass
class AggregationResult:
    """
    Organizations -> repos -> commits/pulls/issues, plus running totals.

    The totals equal the sum over the tree at construction time.
    """

    organizations: list[OrganizationData] = field(default_factory=list)
    total_repos: int = 0
    total_commits: int = 0
    total_pulls: int = 0
    total_issues: int = 0

    def add_organization(self, organization: OrganizationData) -> None:
        """Append an organization and fold its repositories into the totals."""
        self.organizations.append(organization)
        self.total_repos += len(organization.repos)
        for repo in organization.repos:
            self.total_commits += repo.commit_count
            self.total_pulls += repo.pull_count
            self.total_issues += repo.issue_count

    def to_dict(self) -> dict[str, Any]:
        """Wire form returned by ``GET /data`` and stored as the snapshot."""
        return {
            "organizations": [org.to_dict() for org in self.organizations],
            "totalRepos": self.total_repos,
            "totalCommits": self.total_commits,
            "totalPulls": self.total_pulls,
            "totalIssues": self.total_issues,
        }


__all__ = [
    "GitHubItem",
    "GitHubProfile",
    "RepositoryData",
    "OrganizationData",
    "AggregationResult",
]
