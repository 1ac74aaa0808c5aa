"""
SQLAlchemy ORM models for the GitHub integration backend.

Re-exports the models from ghsync.models.
"""

from ghsync.models import Base, GitHubIntegration

__all__ = ["Base", "GitHubIntegration"]
