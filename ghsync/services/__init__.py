"""
Core services.

Services orchestrate repositories and the GitHub client for one request.
"""

from ghsync.services.integration_service import (
    ClientFactory,
    IntegrationService,
    IntegrationStatus,
)

__all__ = [
    "ClientFactory",
    "IntegrationService",
    "IntegrationStatus",
]
