"""CLI entry point for loading the actions catalog of a user or organization."""

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Sequence
from datetime import datetime
from typing import Any

import aiohttp
from pydantic import SecretStr, ValidationError

from action_catalog.config import PUBLIC_API_BASE_URL, CatalogConfig
from action_catalog.github.client import (
    AuthenticationError,
    GitHubAPIError,
    GitHubClient,
)
from action_catalog.locator import ManifestLocator
from action_catalog.models.manifest import CatalogEntry
from action_catalog.orchestrator import CatalogBuilder, CatalogResult
from action_catalog.rate_limit import RateLimitGovernor

TRUTHY = frozenset(["true", "1", "yes", "on"])


def env_input(name: str, default: str = "") -> str:
    """Read an action input, falling back to a plain environment variable.

    GitHub passes action inputs as INPUT_<NAME> environment variables.
    """
    return (
        os.environ.get(f"INPUT_{name.upper()}") or os.environ.get(name) or default
    )


def parse_flag(value: str) -> bool:
    """Parse a boolean action input."""
    return value.strip().lower() in TRUTHY


def get_date_formatted(date: datetime) -> str:
    """Format a timestamp the way lastUpdated is emitted."""
    return date.strftime("%Y%m%d_%H%M")


def format_output(
    entries: Sequence[CatalogEntry], config: CatalogConfig, now: datetime
) -> dict[str, Any]:
    """Format catalog entries for JSON output."""
    return {
        "lastUpdated": get_date_formatted(now),
        "organization": config.organization,
        "user": config.user,
        "actions": [entry.to_output() for entry in entries],
    }


def write_github_output(name: str, value: str) -> None:
    """Append an output value to the file GitHub Actions reads outputs from."""
    if output_path := os.environ.get("GITHUB_OUTPUT"):
        with open(output_path, "a", encoding="utf-8") as output_file:
            output_file.write(f"{name}={value}\n")


async def scan(config: CatalogConfig) -> CatalogResult:
    """List the repositories in scope and build their catalog."""
    log = logging.getLogger("action_catalog")

    async with GitHubClient.from_config(config) as client:
        repositories = await client.list_repositories(config.user, config.organization)
        log.info("Found [%d] repositories", len(repositories))

        builder = CatalogBuilder(
            client=client,
            locator=ManifestLocator(
                client=client, governor=RateLimitGovernor(client=client)
            ),
            config=config,
        )
        return await builder.build_catalog(repositories, config.is_enterprise_server)


async def run(config: CatalogConfig) -> int:
    """Run the scan, emit the catalog and return exit code."""
    log = logging.getLogger("action_catalog")
    log.info("Starting")

    try:
        result = await scan(config)
    except AuthenticationError as error:
        log.error(
            "Could not authenticate with PAT. Please check that it is correct and "
            "that it has [read access] to the organization or user account: %s",
            error,
        )
        return 1
    except (GitHubAPIError, aiohttp.ClientError, ValidationError) as error:
        log.error("Error running action: %s", error)
        return 1

    for failure in result.failures:
        log.warning(
            "Repository [%s] was not scanned: %s",
            failure.repository.full_name,
            failure.error,
        )

    output = json.dumps(format_output(result.entries, config, datetime.now()))
    print(output)
    write_github_output("actions", output)
    return 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Load all actions available in a GitHub user or organization"
    )
    parser.add_argument(
        "--token",
        default=env_input("PAT"),
        help="Personal access token with read access to the repositories",
    )
    parser.add_argument(
        "--user",
        default=env_input("user"),
        help="User account to load actions from",
    )
    parser.add_argument(
        "--organization",
        default=env_input("organization"),
        help="Organization to load actions from (takes precedence over --user)",
    )
    parser.add_argument(
        "--api-base-url",
        default=os.environ.get("GITHUB_API_URL", PUBLIC_API_BASE_URL),
        help="GitHub API base URL, set it for GitHub Enterprise Server",
    )
    parser.add_argument(
        "--remove-token",
        action="store_true",
        default=parse_flag(env_input("removeToken")),
        help="Strip access tokens from download URLs",
    )
    parser.add_argument(
        "--fetch-readmes",
        action="store_true",
        default=parse_flag(env_input("fetchReadmes")),
        help="Add the README download URL of each action's repository",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = CatalogConfig(
            token=SecretStr(args.token),
            user=args.user,
            organization=args.organization,
            api_base_url=args.api_base_url,
            remove_token=args.remove_token,
            fetch_readmes=args.fetch_readmes,
        )
    except ValidationError as error:
        for detail in error.errors():
            logging.getLogger("action_catalog").error("%s", detail["msg"])
        sys.exit(1)

    sys.exit(asyncio.run(run(config)))


if __name__ == "__main__":  # pragma: no cover
    main()
