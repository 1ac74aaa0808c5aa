"""
Repository pattern implementations for data access.

Usage:
    from ghsync.repositories import IntegrationRepository
    from ghsync.db import db

    with db.session() as session:
        repo = IntegrationRepository(session)
        integration = repo.get_by_user_id(user_id)
"""

from .base import BaseRepository
from .integration_repository import IntegrationRepository

__all__ = [
    "BaseRepository",
    "IntegrationRepository",
]
