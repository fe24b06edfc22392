"""GitHub Actions API access."""

from actions_cli.github.client import GitHubActionsClient, GitHubApiError
from actions_cli.github.pagination import PageStream, PaginationError, Request

__all__ = [
    "GitHubActionsClient",
    "GitHubApiError",
    "PageStream",
    "PaginationError",
    "Request",
]
