"""Optional post-processing of catalog entries."""

import logging

from yarl import URL

from action_catalog.github.client import GitHubClient
from action_catalog.models.manifest import CatalogEntry

log = logging.getLogger(__name__)


def strip_token(url: str) -> str:
    """Remove the token query parameter GitHub adds to private download URLs."""
    return str(URL(url, encoded=True).without_query_params("token"))


def remove_token(entry: CatalogEntry) -> CatalogEntry:
    """Return the entry with any access token removed from its download URL."""
    if entry.download_url is None:
        return entry
    return entry.model_copy(update={"download_url": strip_token(entry.download_url)})


async def add_readme(client: GitHubClient, entry: CatalogEntry) -> CatalogEntry:
    """Return the entry with the download URL of the repository README."""
    readme = await client.get_readme(entry.owner, entry.repo)
    if readme is None or readme.download_url is None:
        log.debug("No readme found in repository: %s/%s", entry.owner, entry.repo)
        return entry
    return entry.model_copy(update={"readme": readme.download_url})
