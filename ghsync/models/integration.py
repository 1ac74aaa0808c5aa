"""
GitHub credential record.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GitHubIntegration(Base):
    """
    One live GitHub credential per user.

    Attributes:
        user_id: Owning user identifier (the GitHub profile id from OAuth)
        access_token: OAuth bearer token, encrypted at rest when a key is configured
        refresh_token: Optional OAuth refresh token, encrypted the same way
        github_id / github_username / display_name / email / avatar_url: profile snapshot
        data: Last aggregation snapshot written by a full fetch
        connected_at: When the credential was first stored
        last_sync_at: When the last snapshot was stored
    """

    __tablename__ = "github_integrations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    access_token: Mapped[str] = mapped_column(String(512))
    refresh_token: Mapped[str | None] = mapped_column(String(512), nullable=True)

    github_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    github_username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(512), nullable=True)

    data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    connected_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    last_sync_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<GitHubIntegration user_id={self.user_id!r} username={self.github_username!r}>"
