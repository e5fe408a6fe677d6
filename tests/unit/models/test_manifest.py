"""Tests for manifest and catalog models."""

from action_catalog.models.manifest import (
    ActionReference,
    CatalogEntry,
    ManifestLocation,
    ManifestRecord,
    ManifestSteps,
)
from action_catalog.testing.factories import RepositoryRefFactory


def test_record_defaults_to_undefined() -> None:
    """Defaults every field to the sentinel."""
    record = ManifestRecord()

    assert record.name == "Undefined"
    assert record.author == "Undefined"
    assert record.description == "Undefined"
    assert record.using == "Undefined"
    assert record.steps.actions == []
    assert record.steps.shell == []


def test_entry_merges_location_and_record() -> None:
    """Combines location and parsed metadata into one flat entry."""
    repository = RepositoryRefFactory.build(
        owner="org", name="repo", forked_from="upstream/repo"
    )
    location = ManifestLocation(
        repository=repository,
        name="action.yml",
        path="sub/action.yml",
        download_url="https://raw.test/sub/action.yml",
        forked_from=repository.forked_from,
    )
    record = ManifestRecord(
        name="Build",
        author="Octo",
        description="Builds",
        using="composite",
        steps=ManifestSteps(
            actions=[ActionReference(action="actions/checkout", ref="v4")],
            shell=[{"run": "make", "shell": "bash"}],
        ),
    )

    output = CatalogEntry.from_manifest(location, record).to_output()

    assert output == {
        "name": "Build",
        "owner": "org",
        "repo": "repo",
        "path": "sub/action.yml",
        "downloadUrl": "https://raw.test/sub/action.yml",
        "forkedfrom": "upstream/repo",
        "author": "Octo",
        "description": "Builds",
        "using": "composite",
        "steps": {
            "actions": [{"action": "actions/checkout", "ref": "v4"}],
            "shell": [{"run": "make", "shell": "bash"}],
        },
        "readme": None,
    }


def test_repository_full_name() -> None:
    """Joins owner and name."""
    repository = RepositoryRefFactory.build(owner="org", name="repo")

    assert repository.full_name == "org/repo"
