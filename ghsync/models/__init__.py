"""
SQLAlchemy models for the GitHub integration.

Usage:
    from ghsync.models import GitHubIntegration
"""

from .base import Base
from .integration import GitHubIntegration

__all__ = [
    "Base",
    "GitHubIntegration",
]
