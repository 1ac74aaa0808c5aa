# GitHub API integration module

from .aggregation import aggregate
from .client import GitHubClient
from .types import (
    AggregationResult,
    GitHubProfile,
    OrganizationData,
    RepositoryData,
)

__all__ = [
    "GitHubClient",
    "aggregate",
    "AggregationResult",
    "GitHubProfile",
    "OrganizationData",
    "RepositoryData",
]
