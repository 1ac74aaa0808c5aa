"""
GitHub integration router.

Status, removal and data routes. All data routes require a session and go
through the integration service, which checks the stored token with GitHub
before use and evicts it when GitHub rejects it.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.exc import SQLAlchemyError

from ghsync.constants import ERROR_MESSAGES, REMOVE_SUCCESS_MESSAGE
from ghsync.identity import UserIdentity
from ghsync.logging import get_logger
from ghsync.services import IntegrationService

from ..auth.dependencies import get_current_identity, get_optional_identity
from ..dependencies import get_integration_service
from ..schemas import AggregationResponse, MessageResponse, StatusResponse

logger = get_logger("github")

router = APIRouter(tags=["github"])


@router.get("/status", response_model=StatusResponse)
def get_status(
    identity: UserIdentity | None = Depends(get_optional_identity),
    service: IntegrationService = Depends(get_integration_service),
):
    """Report whether the session user has a working GitHub integration."""
    if identity is None:
        return {"connected": False}

    try:
        return service.get_status(identity).to_dict()
    except SQLAlchemyError as e:
        logger.error("integration_status_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=ERROR_MESSAGES["STATUS_ERROR"],
        ) from e


@router.delete("/remove", response_model=MessageResponse)
def remove_integration(
    identity: UserIdentity = Depends(get_current_identity),
    service: IntegrationService = Depends(get_integration_service),
):
    """Delete the session user's stored credential. Succeeds when none exists."""
    try:
        service.remove(identity)
    except SQLAlchemyError as e:
        logger.error("integration_remove_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=ERROR_MESSAGES["REMOVE_ERROR"],
        ) from e
    return {"message": REMOVE_SUCCESS_MESSAGE}


@router.get("/data", response_model=AggregationResponse)
def get_data(
    identity: UserIdentity = Depends(get_current_identity),
    service: IntegrationService = Depends(get_integration_service),
):
    """Organizations, their repositories, and each repository's commits, pulls and issues."""
    return service.fetch_data(identity).to_dict()


@router.get("/data/orgs")
def get_organizations(
    identity: UserIdentity = Depends(get_current_identity),
    service: IntegrationService = Depends(get_integration_service),
) -> list[dict[str, Any]]:
    return service.list_organizations(identity)


@router.get("/data/org/{org}")
def get_organization_repos(
    org: str,
    identity: UserIdentity = Depends(get_current_identity),
    service: IntegrationService = Depends(get_integration_service),
) -> list[dict[str, Any]]:
    return service.list_organization_repos(identity, org)


@router.get("/data/org/{org}/members")
def get_organization_members(
    org: str,
    identity: UserIdentity = Depends(get_current_identity),
    service: IntegrationService = Depends(get_integration_service),
) -> list[dict[str, Any]]:
    return service.list_organization_members(identity, org)


@router.get("/data/org/{org}/repo/{repo}")
def get_repo_commits(
    org: str,
    repo: str,
    identity: UserIdentity = Depends(get_current_identity),
    service: IntegrationService = Depends(get_integration_service),
) -> list[dict[str, Any]]:
    return service.list_repo_commits(identity, org, repo)


@router.get("/data/org/{org}/repo/{repo}/issues/{issue_number}/comments")
def get_issue_comments(
    org: str,
    repo: str,
    issue_number: int = Path(..., ge=1),
    identity: UserIdentity = Depends(get_current_identity),
    service: IntegrationService = Depends(get_integration_service),
) -> list[dict[str, Any]]:
    return service.list_issue_comments(identity, org, repo, issue_number)
