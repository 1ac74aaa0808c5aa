"""Typed user identity passed into every integration operation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserIdentity:
    """
    The authenticated user a request acts for.

    user_id is the GitHub profile id established by the OAuth flow and is the
    key of the user's credential record.
    """

    user_id: str
    username: str | None = None

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValueError("user_id must not be empty")


__all__ = ["UserIdentity"]
