"""
Utility functions for GitHub OAuth flow.
"""

import httpx

from ghsync.constants import GITHUB_ACCESS_TOKEN_URL, GITHUB_AUTHORIZE_URL
from ghsync.exceptions import ProviderError
from ghsync.github import GitHubClient, GitHubProfile
from ghsync.logging import get_logger

from ..config import get_settings

logger = get_logger("auth.github_oauth")


def get_oauth_authorize_url(state: str) -> str:
    """Build GitHub OAuth authorize URL with client settings and state."""
    settings = get_settings()
    params = {
        "client_id": settings.github_client_id,
        "redirect_uri": settings.github_callback_url,
        "scope": settings.github_scope,
        "state": state,
    }
    query = httpx.QueryParams({key: value for key, value in params.items() if value})
    return f"{GITHUB_AUTHORIZE_URL}?{query}"


def exchange_code_for_token(code: str) -> str | None:
    """
    Exchange GitHub OAuth code for an access token.

    Returns None when GitHub answers without a token (expired or reused code).

    Raises:
        httpx.HTTPError on transport failures or non-success responses.
    """
    settings = get_settings()
    payload = {
        "client_id": settings.github_client_id,
        "client_secret": settings.github_client_secret,
        "code": code,
        "redirect_uri": settings.github_callback_url,
    }
    headers = {"Accept": "application/json"}
    response = httpx.post(
        GITHUB_ACCESS_TOKEN_URL,
        json=payload,
        headers=headers,
        timeout=settings.github_timeout_seconds,
    )
    response.raise_for_status()
    body = response.json()
    access_token = body.get("access_token")
    if not access_token:
        logger.warning("github_token_exchange_empty", error=body.get("error"))
        return None
    return access_token


def get_github_user(access_token: str) -> GitHubProfile:
    """Fetch GitHub user profile and primary email using the OAuth token."""
    with GitHubClient(access_token) as client:
        user_data = client.get_authenticated_user()

        # Email is optional; the scope may not have been granted
        email = None
        try:
            for entry in client.get_user_emails():
                if entry.get("primary"):
                    email = entry.get("email")
                    break
        except ProviderError as e:
            logger.info("github_emails_unavailable", provider_status=e.provider_status)

    return GitHubProfile.from_api(user_data, email=email)
