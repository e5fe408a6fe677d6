"""Pydantic models for GitHub REST API responses."""

from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel

from action_catalog.models.repository import RepositoryRef, Visibility


class Owner(BaseModel):
    """Owner of a repository."""

    login: str


class ParentRepository(BaseModel):
    """Upstream repository of a fork."""

    full_name: str


class Repository(BaseModel):
    """A repository from the repos API."""

    name: str
    full_name: str
    owner: Owner
    private: bool = False
    visibility: Visibility | None = None
    fork: bool = False
    parent: ParentRepository | None = None

    def to_ref(self) -> RepositoryRef:
        """Convert to the reference used by the scanner.

        Older Enterprise Server releases omit visibility, so it is derived
        from the private flag.
        """
        visibility = self.visibility or ("private" if self.private else "public")
        forked_from = self.parent.full_name if self.parent else None
        return RepositoryRef(
            owner=self.owner.login,
            name=self.name,
            visibility=visibility,
            forked_from=forked_from,
        )


class ContentFile(BaseModel):
    """A file from the contents API."""

    type: str = "file"
    name: str
    path: str
    download_url: str | None = None


class CodeSearchItem(BaseModel):
    """A single code search hit."""

    name: str
    path: str


class CodeSearchResponse(BaseModel):
    """Response from the code search API."""

    total_count: int
    items: Sequence[CodeSearchItem]


class RateLimit(BaseModel):
    """Quota state of one rate limit resource."""

    limit: int
    remaining: int
    reset: int


class RateLimitResources(BaseModel):
    """Rate limit resources, only the search quota is read."""

    search: RateLimit


class RateLimitResponse(BaseModel):
    """Response from the rate limit API."""

    resources: RateLimitResources


class WorkflowAccess(BaseModel):
    """Response from the workflow access API for internal repositories."""

    access_level: Literal["none", "user", "organization", "enterprise"]
