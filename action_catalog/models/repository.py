"""Models for repositories under scan."""

from typing import Literal, TypeAlias

from pydantic import Field

from action_catalog.models.base import Model

Visibility: TypeAlias = Literal["public", "internal", "private"]


class RepositoryRef(Model):
    """A repository belonging to the scanned user or organization."""

    owner: str = Field(..., description="Login of the repository owner")
    name: str = Field(..., description="Repository name without the owner")
    visibility: Visibility = Field(..., description="Declared repository visibility")
    forked_from: str | None = Field(
        default=None,
        description="Full name of the parent repository when this one is a fork",
    )

    @property
    def full_name(self) -> str:
        """Repository identifier in owner/name format."""
        return f"{self.owner}/{self.name}"
