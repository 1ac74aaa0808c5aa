"""Base repository class with common CRUD operations."""

from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from ghsync.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.

    Usage:
        class IntegrationRepository(BaseRepository[GitHubIntegration]):
            model = GitHubIntegration

        repo = IntegrationRepository(session)
        integration = repo.get_one_where(user_id="583231")
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def get_one_where(self, **filters) -> T | None:
        """Get the first record matching all filters."""
        stmt = select(self.model)
        for key, value in filters.items():
            stmt = stmt.where(getattr(self.model, key) == value)
        return self.session.scalars(stmt.limit(1)).first()

    def delete_where(self, **filters) -> int:
        """Delete every record matching all filters. Returns the number removed."""
        instances = self.session.scalars(
            select(self.model).filter_by(**filters)
        ).all()
        for instance in instances:
            self.session.delete(instance)
        self.session.flush()
        return len(instances)

