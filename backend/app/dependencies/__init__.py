"""
FastAPI dependency injection module.

Provides centralized dependencies for:
- The GitHub client factory
- Repositories
- Services
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ghsync.github import GitHubClient
from ghsync.repositories import IntegrationRepository
from ghsync.services import ClientFactory, IntegrationService

from ..database import get_db

# =============================================================================
# GitHub Client Dependencies
# =============================================================================


def get_github_client_factory() -> ClientFactory:
    """
    Get the callable that builds a GitHubClient for a token.

    Tests override this to route GitHub calls to a mock transport.
    """
    return GitHubClient


# =============================================================================
# Repository Dependencies
# =============================================================================


def get_integration_repository(db: Session = Depends(get_db)) -> IntegrationRepository:
    """Get IntegrationRepository instance."""
    return IntegrationRepository(db)


# =============================================================================
# Service Dependencies
# =============================================================================


def get_integration_service(
    db: Session = Depends(get_db),
    repository: IntegrationRepository = Depends(get_integration_repository),
    client_factory: ClientFactory = Depends(get_github_client_factory),
) -> IntegrationService:
    """Get IntegrationService instance with injected repository and client factory."""
    return IntegrationService(db, client_factory=client_factory, repository=repository)


__all__ = [
    "get_github_client_factory",
    "get_integration_repository",
    "get_integration_service",
]
