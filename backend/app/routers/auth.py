"""
Authentication router for the GitHub OAuth flow.

- CSRF protection via a signed, short-lived OAuth state cookie
- The GitHub token is handed to the integration service, never to the browser
- The session cookie carries only the user's identity
"""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from ghsync.exceptions import NoAccessToken
from ghsync.identity import UserIdentity
from ghsync.logging import get_logger
from ghsync.services import IntegrationService

from ..auth.github_oauth import exchange_code_for_token, get_github_user, get_oauth_authorize_url
from ..auth.session import (
    SessionPayload,
    create_oauth_state_token,
    create_session_token,
    generate_oauth_state,
    verify_oauth_state,
)
from ..config import get_settings
from ..dependencies import get_integration_service

logger = get_logger("auth")

router = APIRouter(prefix="/auth", tags=["auth"])

OAUTH_STATE_COOKIE = "github.oauth_state"


def _error_redirect(reason: str) -> RedirectResponse:
    settings = get_settings()
    response = RedirectResponse(url=f"{settings.frontend_error_url}?error={reason}")
    response.delete_cookie(key=OAUTH_STATE_COOKIE, path="/", samesite="lax")
    return response


@router.get("/github")
def login():
    """
    Redirect to GitHub OAuth authorization page.

    Flow:
    1. Generate a random state and store it in a signed cookie
    2. Redirect to GitHub with the state and requested scopes
    3. GitHub redirects to /auth/github/callback with code and state
    4. Callback checks the state against the cookie before anything else
    """
    settings = get_settings()
    state = generate_oauth_state()

    response = RedirectResponse(url=get_oauth_authorize_url(state))
    response.set_cookie(
        key=OAUTH_STATE_COOKIE,
        value=create_oauth_state_token(state),
        httponly=True,
        secure=settings.is_production,
        samesite="lax",  # Sent on the top-level redirect back from GitHub
        max_age=settings.oauth_state_ttl,
        path="/",
    )
    return response


@router.get("/github/callback")
def oauth_callback(
    request: Request,
    code: str | None = Query(None),
    state: str | None = Query(None),
    service: IntegrationService = Depends(get_integration_service),
):
    """
    Handle GitHub OAuth callback.

    Always answers with a redirect to the frontend: the success page once the
    credential is stored and the session cookie set, the error page otherwise.
    """
    settings = get_settings()

    if not verify_oauth_state(request.cookies.get(OAUTH_STATE_COOKIE), state):
        logger.warning(
            "oauth_state_invalid",
            has_state=bool(state),
            message="Invalid or missing OAuth state - possible CSRF attack",
        )
        return _error_redirect("invalid_state")

    if not code:
        logger.warning("oauth_callback_missing_code")
        return _error_redirect("authentication_failed")

    try:
        access_token = exchange_code_for_token(code)
        if not access_token:
            raise NoAccessToken()

        profile = get_github_user(access_token)
        identity = UserIdentity(user_id=profile.id, username=profile.username)
        service.complete_oauth(identity, access_token, profile=profile)

    except Exception as e:
        logger.error(
            "oauth_callback_error",
            error=str(e),
            error_type=type(e).__name__,
        )
        return _error_redirect("authentication_failed")

    session_token = create_session_token(
        SessionPayload(
            sub=profile.id,
            username=profile.username,
            display_name=profile.display_name,
            avatar_url=profile.avatar_url,
        )
    )

    logger.info("oauth_login_success", user_id=profile.id, username=profile.username)

    response = RedirectResponse(url=settings.frontend_success_url)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_token,
        httponly=True,  # Cannot be accessed by JavaScript
        secure=settings.is_production,  # Only send over HTTPS in production
        samesite="lax",
        max_age=settings.session_max_age_seconds,
        path="/",
    )
    response.delete_cookie(key=OAUTH_STATE_COOKIE, path="/", samesite="lax")
    return response
