"""Tolerant parsing of action manifests into normalized records."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import yaml

from action_catalog.models.manifest import (
    UNDEFINED,
    ActionReference,
    ManifestRecord,
    ManifestSteps,
)
from action_catalog.sanitizer import sanitize

log = logging.getLogger(__name__)


class ManifestParseError(ValueError):
    """Raised when manifest content is not a YAML mapping."""


def parse_manifest(file_path: str, repo: str | None, content: str) -> ManifestRecord:
    """Parse manifest content, falling back to defaults on invalid YAML.

    Args:
        file_path: Path of the manifest, used in the warning
        repo: Repository identifier, used in the warning
        content: Raw manifest text

    Returns:
        The normalized record. Fields that are missing, empty or unparsable
        hold the "Undefined" sentinel.

    """
    try:
        document = load_document(content)
    except (yaml.YAMLError, ManifestParseError) as error:
        log.warning(
            "Error parsing action file [%s] in repo [%s] with error: %s",
            file_path,
            repo,
            error,
        )
        log.info(
            "The parsing error is informational, searching for actions has continued"
        )
        return ManifestRecord()

    runs = document.get("runs")
    if not isinstance(runs, Mapping):
        runs = {}

    return ManifestRecord(
        name=clean_field(document.get("name")),
        author=clean_field(document.get("author")),
        description=clean_field(document.get("description")),
        using=clean_field(runs.get("using")),
        steps=extract_steps(runs.get("steps")),
    )


def load_document(content: str) -> Mapping[str, Any]:
    """Load YAML content and require a mapping at the top level."""
    document = yaml.safe_load(content)
    if not isinstance(document, Mapping):
        raise ManifestParseError(
            f"Expected a mapping, got {type(document).__name__}"
        )
    return document


def clean_field(value: Any) -> str:
    """Sanitize a scalar field, or return the sentinel for falsy values."""
    if not value:
        return UNDEFINED
    return sanitize(str(value)) or UNDEFINED


def extract_steps(steps: Any) -> ManifestSteps:
    """Split runs.steps into action references and remaining steps.

    A step with ``uses: owner/name@ref`` becomes an action reference; any
    other step is kept as-is under shell.
    """
    if not isinstance(steps, Sequence) or isinstance(steps, str):
        return ManifestSteps()

    actions: list[ActionReference] = []
    shell: list[Mapping[str, Any]] = []
    for step in steps:
        if not isinstance(step, Mapping):
            continue
        uses = step.get("uses")
        if isinstance(uses, str) and uses:
            action, _, ref = uses.partition("@")
            actions.append(ActionReference(action=action, ref=ref))
        else:
            shell.append({str(key): value for key, value in step.items()})

    return ManifestSteps(actions=actions, shell=shell)
