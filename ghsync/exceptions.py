"""
Error taxonomy for the GitHub integration.

Every error carries the HTTP status it maps to and a public message that is
safe to return to clients. Provider detail stays on the exception for logging.
"""

from typing import Any

from .constants import ERROR_MESSAGES


class IntegrationError(Exception):
    """Base class for errors raised by integration operations."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.public_message
        super().__init__(self.message)


class NotAuthenticated(IntegrationError):
    """No session identity on the request."""

    status_code = 401
    public_message = ERROR_MESSAGES["NOT_AUTHENTICATED"]


class IntegrationNotFound(IntegrationError):
    """The user has no stored GitHub credential."""

    status_code = 404
    public_message = ERROR_MESSAGES["INTEGRATION_NOT_FOUND"]


class InvalidCredential(IntegrationError):
    """GitHub rejected the stored (or freshly issued) token."""

    status_code = 401
    public_message = ERROR_MESSAGES["INVALID_CREDENTIAL"]


class NoAccessToken(IntegrationError):
    """The OAuth callback produced no access token."""

    status_code = 400
    public_message = ERROR_MESSAGES["NO_ACCESS_TOKEN"]


class ProviderError(IntegrationError):
    """A single GitHub API call failed."""

    public_message = ERROR_MESSAGES["FETCH_ERROR"]

    def __init__(
        self,
        resource: str,
        params: dict[str, Any] | None = None,
        provider_status: int | None = None,
        provider_message: str | None = None,
    ):
        self.resource = resource
        self.params = params or {}
        self.provider_status = provider_status
        self.provider_message = provider_message
        super().__init__(self.public_message)

    def __str__(self) -> str:
        status = self.provider_status if self.provider_status is not None else "no response"
        return f"GitHub {self.resource} request failed ({status}): {self.provider_message}"


class FetchError(IntegrationError):
    """
    The aggregation traversal aborted.

    Names the resource and parameters of the call that failed; the original
    ProviderError is chained as ``__cause__``.
    """

    public_message = ERROR_MESSAGES["FETCH_ERROR"]

    def __init__(self, resource: str, params: dict[str, Any] | None = None):
        self.resource = resource
        self.params = params or {}
        super().__init__(self.public_message)

    def __str__(self) -> str:
        detail = ", ".join(f"{key}={value}" for key, value in self.params.items())
        return f"Failed to fetch {self.resource}" + (f" ({detail})" if detail else "")


__all__ = [
    "IntegrationError",
    "NotAuthenticated",
    "IntegrationNotFound",
    "InvalidCredential",
    "NoAccessToken",
    "ProviderError",
    "FetchError",
]
