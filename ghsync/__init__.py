"""
GitHub Integration core library.

This package holds everything behind the HTTP surface: configuration,
logging, database management, the credential store, the GitHub API client,
the aggregation traversal and the integration service.

Usage:
    # Config
    from ghsync.config import get_settings

    # Logging
    from ghsync.logging import get_logger, configure_logging

    # Database
    from ghsync.db import db, get_db
    from ghsync.models import GitHubIntegration
    from ghsync.repositories import IntegrationRepository

    # GitHub
    from ghsync.github import GitHubClient, aggregate

    # Service
    from ghsync.services import IntegrationService
"""

__version__ = "1.0.0"

# Lazy imports to avoid circular dependencies
# Users should import directly from submodules:
#   from ghsync.db import db
#   from ghsync.config import get_settings
#   from ghsync.logging import get_logger
