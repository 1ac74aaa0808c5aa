"""
Signed session and OAuth state cookies.

Both are JWTs signed with SESSION_SECRET. The session cookie identifies the
user; the state cookie binds an OAuth authorize redirect to its callback.
Neither ever carries a GitHub token.
"""

import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt
from pydantic import BaseModel

from ghsync.identity import UserIdentity

from ..config import get_settings

OAUTH_STATE_PURPOSE = "oauth_state"


class SessionPayload(BaseModel):
    """Claims carried by the session cookie."""

    sub: str
    username: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None

    def to_identity(self) -> UserIdentity:
        return UserIdentity(user_id=self.sub, username=self.username)


def _encode(claims: Dict[str, Any], expires_seconds: int) -> str:
    settings = get_settings()
    to_encode = claims.copy()
    to_encode.update({
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_seconds),
        "jti": str(uuid.uuid4()),
    })
    return jwt.encode(to_encode, settings.session_secret, algorithm=settings.session_algorithm)


def _decode(token: str) -> Dict[str, Any]:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.session_secret, algorithms=[settings.session_algorithm])
    except JWTError as exc:
        raise ValueError("Invalid token") from exc


def create_session_token(payload: SessionPayload, expires_seconds: int | None = None) -> str:
    """Sign a session payload, expiring after SESSION_MAX_AGE_SECONDS by default."""
    settings = get_settings()
    return _encode(
        payload.model_dump(),
        expires_seconds or settings.session_max_age_seconds,
    )


def decode_session_token(token: str) -> SessionPayload:
    """
    Decode and validate a session cookie.

    Raises:
        ValueError: If the token is invalid, expired, or not a session token.
    """
    claims = _decode(token)
    if claims.get("purpose") == OAUTH_STATE_PURPOSE or not claims.get("sub"):
        raise ValueError("Invalid session token")
    return SessionPayload(
        sub=str(claims["sub"]),
        username=claims.get("username"),
        display_name=claims.get("display_name"),
        avatar_url=claims.get("avatar_url"),
    )


def generate_oauth_state() -> str:
    return secrets.token_urlsafe(32)


def create_oauth_state_token(state: str) -> str:
    """Sign the OAuth state for the short-lived state cookie."""
    settings = get_settings()
    return _encode({"state": state, "purpose": OAUTH_STATE_PURPOSE}, settings.oauth_state_ttl)


def verify_oauth_state(state_token: str | None, state: str | None) -> bool:
    """Check the callback's ``state`` query parameter against the state cookie."""
    if not state_token or not state:
        return False
    try:
        claims = _decode(state_token)
    except ValueError:
        return False
    if claims.get("purpose") != OAUTH_STATE_PURPOSE:
        return False
    return secrets.compare_digest(str(claims.get("state", "")), state)
