"""Proactive backoff for the code search rate limit."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from action_catalog.github.client import GitHubClient

log = logging.getLogger(__name__)

MIN_REMAINING = 2
PAST_RESET_WAIT = 2.5
RESET_MARGIN = 1.0


def wait_seconds(remaining: int, reset: float, now: float) -> float:
    """Compute how long to wait before the next search call.

    Args:
        remaining: Search calls left in the current window
        reset: Epoch seconds at which the window resets
        now: Current epoch seconds

    Returns:
        Zero while enough quota is left. Otherwise the time until reset plus
        a margin, or a fixed wait when the reset time has already passed.

    """
    if remaining > MIN_REMAINING:
        return 0.0

    wait = reset - now
    if wait < 0:
        return PAST_RESET_WAIT
    return wait + RESET_MARGIN


@dataclass(frozen=True, kw_only=True)
class RateLimitGovernor:
    """Waits out the search quota window before a search call.

    The search API allows only a few calls per minute, independent of the
    core API quota. The governor reads the quota and sleeps, it never
    re-checks after waking.
    """

    client: GitHubClient
    clock: Callable[[], float] = field(default=time.time, repr=False)
    sleep: Callable[[float], Awaitable[None]] = field(
        default=asyncio.sleep, repr=False
    )

    async def await_quota(self) -> None:
        """Sleep until a search call is safe to make."""
        quota = await self.client.get_search_rate_limit()
        wait = wait_seconds(quota.remaining, quota.reset, self.clock())
        if not wait:
            return

        log.debug("Search API reset time: %s", time.ctime(quota.reset))
        log.info("Waiting %.1f seconds to prevent the search API rate limit", wait)
        await self.sleep(wait)
