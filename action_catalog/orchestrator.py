"""Catalog builder driving manifest discovery over a set of repositories."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import aiohttp
from pydantic import ValidationError

from action_catalog.config import CatalogConfig
from action_catalog.enrichment import add_readme, remove_token
from action_catalog.github.client import (
    AuthenticationError,
    GitHubAPIError,
    GitHubClient,
)
from action_catalog.locator import ManifestLocator
from action_catalog.models.manifest import (
    CatalogEntry,
    ManifestLocation,
    ManifestRecord,
)
from action_catalog.models.repository import RepositoryRef
from action_catalog.parser import parse_manifest

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class RepositoryFailure:
    """A repository whose scan was aborted by an error."""

    repository: RepositoryRef
    error: str


@dataclass(frozen=True, kw_only=True)
class CatalogResult:
    """Outcome of scanning a set of repositories."""

    entries: Sequence[CatalogEntry]
    failures: Sequence[RepositoryFailure]
    scanned: int


@dataclass(frozen=True, kw_only=True)
class CatalogBuilder:
    """Scans repositories one at a time and collects their actions."""

    client: GitHubClient
    locator: ManifestLocator
    config: CatalogConfig

    async def build_catalog(
        self,
        repositories: Sequence[RepositoryRef],
        is_enterprise_server: bool,
    ) -> CatalogResult:
        """Build the catalog for the given repositories, in input order.

        An error while scanning one repository is recorded as a failure and
        the scan moves on. Authentication errors abort the whole run.

        Args:
            repositories: Repositories to scan
            is_enterprise_server: Whether the API is Enterprise Server, which
                disables the code search fallback

        Returns:
            Entries for visible repositories with a manifest, plus failures

        """
        entries: list[CatalogEntry] = []
        failures: list[RepositoryFailure] = []

        for repository in repositories:
            log.debug("Searching repository for actions: %s", repository.name)
            try:
                entry = await self._scan_repository(repository, is_enterprise_server)
            except AuthenticationError:
                raise
            except (GitHubAPIError, aiohttp.ClientError, ValidationError) as error:
                log.error(
                    "Scanning repository [%s] failed: %s",
                    repository.full_name,
                    error,
                    exc_info=error,
                )
                failures.append(
                    RepositoryFailure(repository=repository, error=str(error))
                )
                continue

            if entry is not None:
                entries.append(entry)

        log.info(
            "Found [%d] actions in [%d] repos", len(entries), len(repositories)
        )
        if failures:
            log.warning(
                "Scanning failed for [%d] repos: %s",
                len(failures),
                ", ".join(failure.repository.full_name for failure in failures),
            )

        return CatalogResult(
            entries=entries, failures=failures, scanned=len(repositories)
        )

    async def _scan_repository(
        self, repository: RepositoryRef, is_enterprise_server: bool
    ) -> CatalogEntry | None:
        repository = await self._resolve_fork(repository)

        location = await self.locator.locate(repository, is_enterprise_server)
        if location is None:
            return None

        entry = CatalogEntry.from_manifest(location, await self._load(location))
        if self.config.remove_token:
            entry = remove_token(entry)
        if self.config.fetch_readmes:
            entry = await add_readme(self.client, entry)

        log.info(
            "Found action file in repository: [%s] with filename [%s] "
            "download url [%s]. Visibility of repo is [%s]",
            repository.name,
            location.name,
            entry.download_url,
            repository.visibility,
        )

        if not await self._is_visible(repository):
            return None
        return entry

    async def _resolve_fork(self, repository: RepositoryRef) -> RepositoryRef:
        """Attach the parent repository name when the repository is a fork."""
        info = await self.client.get_repository(repository.owner, repository.name)
        forked_from = info.parent.full_name if info.parent else None
        return repository.model_copy(update={"forked_from": forked_from})

    async def _load(self, location: ManifestLocation) -> ManifestRecord:
        """Download and parse the manifest at a location."""
        if location.download_url is None:
            log.info(
                "No download url for [%s] in [%s]",
                location.path,
                location.repository.full_name,
            )
            return ManifestRecord()

        content = await self.client.fetch_raw(location.download_url)
        return parse_manifest(location.path, location.repository.full_name, content)

    async def _is_visible(self, repository: RepositoryRef) -> bool:
        """Apply visibility gating.

        Public repositories always pass and private ones never do. Internal
        repositories pass unless workflow access to them is disabled.
        """
        if repository.visibility == "public":
            return True

        if repository.visibility == "private":
            log.debug("[%s] is private repo, skipping.", repository.full_name)
            return False

        log.debug("Get access settings for repository [%s]", repository.full_name)
        try:
            access = await self.client.get_workflow_access_level(
                repository.owner, repository.name
            )
        except AuthenticationError:
            raise
        except (GitHubAPIError, aiohttp.ClientError, ValidationError) as error:
            log.info(
                "Error retrieving access level for the action(s) in [%s]. Make "
                "sure the Access Token used has the 'Administration: read' "
                "scope. Error: %s",
                repository.full_name,
                error,
            )
            return False

        if access.access_level == "none":
            log.info("Access to use action [%s] is disabled", repository.full_name)
            return False
        return True
