"""Per-repository search for an action manifest."""

import logging
from dataclasses import dataclass

from action_catalog.github.client import GitHubClient
from action_catalog.github.models import ContentFile
from action_catalog.models.manifest import ManifestLocation
from action_catalog.models.repository import RepositoryRef
from action_catalog.rate_limit import RateLimitGovernor

log = logging.getLogger(__name__)

ROOT_MANIFESTS = ("action.yml", "action.yaml")


def search_query(repository: RepositoryRef) -> str:
    """Build the code search query for manifests anywhere in a repository."""
    return f"filename:action language:YAML repo:{repository.full_name}"


@dataclass(frozen=True, kw_only=True)
class ManifestLocator:
    """Finds the manifest of a repository.

    Strategies, each tried only when the previous found nothing:
    1. action.yml in the repository root
    2. action.yaml in the repository root
    3. code search over the whole repository (public API only)
    """

    client: GitHubClient
    governor: RateLimitGovernor

    async def locate(
        self, repository: RepositoryRef, is_enterprise_server: bool
    ) -> ManifestLocation | None:
        """Return the manifest location, or None when there is none."""
        for path in ROOT_MANIFESTS:
            file = await self.client.get_content(
                repository.owner, repository.name, path
            )
            if file is None:
                log.debug("No %s file found in repository: %s", path, repository.name)
                continue
            return self._to_location(repository, file)

        log.info("No actions found at root level in repository: %s", repository.name)

        # Enterprise Server has search rate limiting disabled by default
        if not is_enterprise_server:
            if (location := await self._search(repository)) is not None:
                return location

        log.info("No actions found in repository: %s", repository.name)
        return None

    async def _search(self, repository: RepositoryRef) -> ManifestLocation | None:
        """Search the repository for manifests in subdirectories.

        Every hit is fetched and the last one that resolves to a file wins.
        """
        log.info("Checking subdirectories in repository: %s", repository.name)
        await self.governor.await_quota()
        results = await self.client.search_code(search_query(repository))

        location: ManifestLocation | None = None
        for item in results.items:
            file = await self.client.get_content(
                repository.owner, repository.name, item.path
            )
            if file is not None:
                location = self._to_location(repository, file)

        return location

    @staticmethod
    def _to_location(repository: RepositoryRef, file: ContentFile) -> ManifestLocation:
        return ManifestLocation(
            repository=repository,
            name=file.name,
            path=file.path,
            download_url=file.download_url,
            forked_from=repository.forked_from,
        )
