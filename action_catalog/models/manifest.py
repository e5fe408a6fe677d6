"""Models for discovered action manifests and catalog entries."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import Field

from action_catalog.models.base import Model
from action_catalog.models.repository import RepositoryRef

UNDEFINED = "Undefined"


@dataclass(frozen=True, kw_only=True)
class ManifestLocation:
    """A manifest file found in a repository, not fetched yet."""

    repository: RepositoryRef
    name: str
    path: str
    download_url: str | None = None
    forked_from: str | None = None


class ActionReference(Model):
    """A step that uses another action, split into action and ref."""

    action: str
    ref: str


class ManifestSteps(Model):
    """Execution steps declared under runs.steps, in declaration order."""

    actions: Sequence[ActionReference] = Field(default_factory=list)
    shell: Sequence[Mapping[str, Any]] = Field(default_factory=list)


class ManifestRecord(Model):
    """Normalized metadata extracted from a manifest."""

    name: str = UNDEFINED
    author: str = UNDEFINED
    description: str = UNDEFINED
    using: str = UNDEFINED
    steps: ManifestSteps = Field(default_factory=ManifestSteps)


class CatalogEntry(Model):
    """One discovered action, as emitted in the catalog output."""

    name: str
    owner: str
    repo: str
    path: str
    download_url: str | None = Field(default=None, serialization_alias="downloadUrl")
    forked_from: str | None = Field(default=None, serialization_alias="forkedfrom")
    author: str = UNDEFINED
    description: str = UNDEFINED
    using: str = UNDEFINED
    steps: ManifestSteps = Field(default_factory=ManifestSteps)
    readme: str | None = None

    @classmethod
    def from_manifest(
        cls, location: ManifestLocation, record: ManifestRecord
    ) -> "CatalogEntry":
        """Merge a location with the metadata parsed from its content."""
        return cls(
            name=record.name,
            owner=location.repository.owner,
            repo=location.repository.name,
            path=location.path,
            download_url=location.download_url,
            forked_from=location.forked_from,
            author=record.author,
            description=record.description,
            using=record.using,
            steps=record.steps,
        )

    def to_output(self) -> dict[str, Any]:
        """Serialize using the output key names."""
        return self.model_dump(mode="json", by_alias=True)
