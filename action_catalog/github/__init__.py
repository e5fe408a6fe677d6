"""GitHub API access for the catalog scanner."""

from action_catalog.github.client import (
    AuthenticationError,
    GitHubAPIError,
    GitHubClient,
)

__all__ = ["AuthenticationError", "GitHubAPIError", "GitHubClient"]
