"""
Application constants for the GitHub integration.

Contains GitHub endpoints, request headers, OAuth scopes and the public
error messages returned by the HTTP surface.
"""

# =============================================================================
# GitHub API
# =============================================================================

GITHUB_API_BASE = "https://api.github.com"
GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_ACCESS_TOKEN_URL = "https://github.com/login/oauth/access_token"

GITHUB_ACCEPT_HEADER = "application/vnd.github.v3+json"
GITHUB_USER_AGENT = "GitHubIntegration/1.0"

# Read email, full repo access, read org membership
GITHUB_OAUTH_SCOPES = ("user:email", "repo", "read:org")


# =============================================================================
# Resource names (used in logs and errors)
# =============================================================================

RESOURCE_USER = "user"
RESOURCE_USER_EMAILS = "user_emails"
RESOURCE_ORGANIZATIONS = "organizations"
RESOURCE_ORG_REPOS = "organization_repos"
RESOURCE_ORG_MEMBERS = "organization_members"
RESOURCE_REPO_COMMITS = "repo_commits"
RESOURCE_REPO_PULLS = "repo_pulls"
RESOURCE_REPO_ISSUES = "repo_issues"
RESOURCE_ISSUE_COMMENTS = "issue_comments"


# =============================================================================
# Error Messages
# =============================================================================

ERROR_MESSAGES = {
    "NOT_AUTHENTICATED": "Not authenticated",
    "INTEGRATION_NOT_FOUND": "GitHub integration not found",
    "INVALID_CREDENTIAL": "GitHub credential is no longer valid",
    "NO_ACCESS_TOKEN": "No access token found",
    "STORAGE_ERROR": "Failed to store GitHub data",
    "FETCH_ERROR": "Failed to fetch GitHub data",
    "REMOVE_ERROR": "Failed to remove integration",
    "STATUS_ERROR": "Failed to get integration status",
}

REMOVE_SUCCESS_MESSAGE = "Integration removed successfully"


__all__ = [
    "GITHUB_API_BASE",
    "GITHUB_AUTHORIZE_URL",
    "GITHUB_ACCESS_TOKEN_URL",
    "GITHUB_ACCEPT_HEADER",
    "GITHUB_USER_AGENT",
    "GITHUB_OAUTH_SCOPES",
    "RESOURCE_USER",
    "RESOURCE_USER_EMAILS",
    "RESOURCE_ORGANIZATIONS",
    "RESOURCE_ORG_REPOS",
    "RESOURCE_ORG_MEMBERS",
    "RESOURCE_REPO_COMMITS",
    "RESOURCE_REPO_PULLS",
    "RESOURCE_REPO_ISSUES",
    "RESOURCE_ISSUE_COMMENTS",
    "ERROR_MESSAGES",
    "REMOVE_SUCCESS_MESSAGE",
]
