"""GitHub REST API client used by the catalog scanner."""

import logging
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import aiohttp

from action_catalog.config import CatalogConfig
from action_catalog.github.models import (
    CodeSearchResponse,
    ContentFile,
    RateLimit,
    RateLimitResponse,
    Repository,
    WorkflowAccess,
)
from action_catalog.models.repository import RepositoryRef

log = logging.getLogger(__name__)

PAGE_SIZE = 100


class GitHubAPIError(RuntimeError):
    """Raised when the GitHub API answers with an unexpected status."""

    def __init__(self, message: str, *, status: int) -> None:
        super().__init__(message)
        self.status = status


class AuthenticationError(GitHubAPIError):
    """Raised when the token is rejected by the GitHub API."""


async def _raise_for_status(response: aiohttp.ClientResponse, operation: str) -> None:
    text = await response.text()
    error_cls = AuthenticationError if response.status == 401 else GitHubAPIError
    raise error_cls(
        f"Failed to {operation}: {response.status} {text}", status=response.status
    )


@dataclass(frozen=True, kw_only=True)
class GitHubClient:
    """Thin async wrapper over the GitHub endpoints the scanner touches.

    Paths are relative to the configured API base URL so the same client
    works against github.com and Enterprise Server.
    """

    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: CatalogConfig
    ) -> AsyncGenerator["GitHubClient", None]:
        """Create client with managed session lifecycle."""
        headers = {
            "Authorization": f"Bearer {config.token.get_secret_value()}",
            "Accept": "application/vnd.github+json",
        }
        async with aiohttp.ClientSession(
            base_url=config.api_base_url,
            headers=headers,
        ) as session:
            yield cls(session=session)

    async def list_repositories(
        self, user: str, organization: str
    ) -> Sequence[RepositoryRef]:
        """List all repositories of an organization, or of a user.

        The organization takes precedence when both are given.
        """
        if organization:
            url = f"orgs/{organization}/repos"
            params = {"type": "all"}
        else:
            url = f"users/{user}/repos"
            params = {"type": "owner"}

        repositories: list[RepositoryRef] = []
        page = 1
        while True:
            page_params = {**params, "per_page": str(PAGE_SIZE), "page": str(page)}
            async with self.session.get(url, params=page_params) as response:
                if response.status != 200:
                    await _raise_for_status(response, "list repositories")
                data = await response.json()

            repositories.extend(
                Repository.model_validate(item).to_ref() for item in data
            )

            if len(data) < PAGE_SIZE:
                break
            page += 1

        return repositories

    async def get_repository(self, owner: str, repo: str) -> Repository:
        """Get repository details, including the parent of a fork."""
        async with self.session.get(f"repos/{owner}/{repo}") as response:
            if response.status != 200:
                await _raise_for_status(response, "get repository")
            data = await response.json()

        return Repository.model_validate(data)

    async def get_content(self, owner: str, repo: str, path: str) -> ContentFile | None:
        """Get file metadata, or None when no file exists at the path."""
        url = f"repos/{owner}/{repo}/contents/{quote(path)}"
        async with self.session.get(url) as response:
            if response.status == 404:
                return None
            if response.status != 200:
                await _raise_for_status(response, "get content")
            data: Any = await response.json()

        # Directories come back as a listing
        if not isinstance(data, dict) or data.get("type", "file") != "file":
            log.debug("Path [%s] in [%s/%s] is not a file", path, owner, repo)
            return None

        return ContentFile.model_validate(data)

    async def get_readme(self, owner: str, repo: str) -> ContentFile | None:
        """Get the preferred README of a repository, if it has one."""
        async with self.session.get(f"repos/{owner}/{repo}/readme") as response:
            if response.status == 404:
                return None
            if response.status != 200:
                await _raise_for_status(response, "get readme")
            data = await response.json()

        return ContentFile.model_validate(data)

    async def search_code(self, query: str) -> CodeSearchResponse:
        """Run a code search query."""
        params = {"q": query, "per_page": str(PAGE_SIZE)}
        async with self.session.get("search/code", params=params) as response:
            if response.status != 200:
                await _raise_for_status(response, "search code")
            data = await response.json()

        return CodeSearchResponse.model_validate(data)

    async def get_search_rate_limit(self) -> RateLimit:
        """Get the remaining code search quota."""
        async with self.session.get("rate_limit") as response:
            if response.status != 200:
                await _raise_for_status(response, "get rate limit")
            data = await response.json()

        return RateLimitResponse.model_validate(data).resources.search

    async def get_workflow_access_level(self, owner: str, repo: str) -> WorkflowAccess:
        """Get who may use the actions of an internal repository."""
        url = f"repos/{owner}/{repo}/actions/permissions/access"
        async with self.session.get(url) as response:
            if response.status != 200:
                await _raise_for_status(response, "get workflow access level")
            data = await response.json()

        return WorkflowAccess.model_validate(data)

    async def fetch_raw(self, url: str) -> str:
        """Download raw file content from an absolute download URL."""
        async with self.session.get(url) as response:
            if response.status != 200:
                await _raise_for_status(response, "download file")
            return await response.text(errors="replace")
