"""
Aggregation traversal: organizations -> repos -> commits/pulls/issues.

The walk is sequential and unbounded. It issues one call for the organization
list, one per organization, and three per repository, in provider order. The
first failing call aborts the whole traversal; partial results are discarded.
"""

import time

from ghsync.constants import RESOURCE_ORG_REPOS, RESOURCE_ORGANIZATIONS
from ghsync.exceptions import FetchError, ProviderError
from ghsync.logging import get_logger

from .client import GitHubClient
from .types import AggregationResult, OrganizationData, RepositoryData

logger = get_logger("github.aggregation")


def _required_field(item: dict, field: str, resource: str, params: dict) -> str:
    """Read a field every listed item must carry; a malformed item aborts the walk."""
    value = item.get(field) if isinstance(item, dict) else None
    if not value:
        logger.error("aggregation_malformed_item", resource=resource, params=params, field=field)
        raise FetchError(resource, params)
    return value


def _aggregate_organization(client: GitHubClient, org_login: str) -> OrganizationData:
    organization = OrganizationData(name=org_login)

    for repo in client.get_organization_repos(org_login):
        repo_name = _required_field(repo, "name", RESOURCE_ORG_REPOS, {"org": org_login})
        organization.repos.append(
            RepositoryData(
                name=repo_name,
                commits=client.get_repo_commits(org_login, repo_name),
                pulls=client.get_repo_pulls(org_login, repo_name),
                issues=client.get_repo_issues(org_login, repo_name),
            )
        )

    return organization


def aggregate(client: GitHubClient) -> AggregationResult:
    """
    Walk every organization the token can see and total its activity.

    Raises:
        FetchError: naming the resource and parameters of the first failed call.
    """
    start = time.perf_counter()
    result = AggregationResult()

    try:
        for org in client.get_organizations():
            org_login = _required_field(org, "login", RESOURCE_ORGANIZATIONS, {})
            result.add_organization(_aggregate_organization(client, org_login))
    except ProviderError as e:
        logger.error(
            "aggregation_failed",
            resource=e.resource,
            params=e.params,
            provider_status=e.provider_status,
            duration_seconds=round(time.perf_counter() - start, 3),
        )
        raise FetchError(e.resource, e.params) from e

    logger.info(
        "aggregation_complete",
        duration_seconds=round(time.perf_counter() - start, 3),
        organizations=len(result.organizations),
        total_repos=result.total_repos,
        total_commits=result.total_commits,
        total_pulls=result.total_pulls,
        total_issues=result.total_issues,
    )
    return result


__all__ = ["aggregate"]
