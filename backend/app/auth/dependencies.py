"""
Authentication dependencies for FastAPI routes.

The user is identified by the signed session cookie set at the end of the
OAuth flow. Routes receive a UserIdentity, never the cookie itself.
"""

from fastapi import HTTPException, Request, status

from ghsync.identity import UserIdentity

from ..config import get_settings
from .session import decode_session_token


def get_optional_identity(request: Request) -> UserIdentity | None:
    """
    Get the session identity if present and valid, otherwise None.

    Used by the status route, which reports "not connected" instead of 401.
    """
    settings = get_settings()
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return None

    try:
        return decode_session_token(token).to_identity()
    except ValueError:
        return None


def get_current_identity(request: Request) -> UserIdentity:
    """Resolve the session identity or raise 401."""
    identity = get_optional_identity(request)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return identity
