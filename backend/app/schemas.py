"""
Pydantic schemas for response validation.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StatusResponse(BaseModel):
    connected: bool


class MessageResponse(BaseModel):
    message: str


class RepositoryResponse(BaseModel):
    name: str
    commits: list[dict[str, Any]] = Field(default_factory=list)
    pulls: list[dict[str, Any]] = Field(default_factory=list)
    issues: list[dict[str, Any]] = Field(default_factory=list)


class OrganizationResponse(BaseModel):
    name: str
    repos: list[RepositoryResponse] = Field(default_factory=list)


class AggregationResponse(BaseModel):
    """Wire form of a full aggregation; totals use camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    organizations: list[OrganizationResponse] = Field(default_factory=list)
    total_repos: int = Field(alias="totalRepos")
    total_commits: int = Field(alias="totalCommits")
    total_pulls: int = Field(alias="totalPulls")
    total_issues: int = Field(alias="totalIssues")
