"""Tests for the search rate limit governor."""

from unittest.mock import AsyncMock, Mock

import pytest

from action_catalog.github.client import GitHubClient
from action_catalog.github.models import RateLimit
from action_catalog.rate_limit import RateLimitGovernor, wait_seconds

NOW = 1_700_000_000.0


@pytest.mark.parametrize(
    ("remaining", "reset", "expected"),
    [
        (30, NOW + 60, 0.0),
        (3, NOW + 60, 0.0),
        (2, NOW + 10, 11.0),
        (1, NOW + 10, 11.0),
        (0, NOW + 0.5, 1.5),
        (0, NOW - 5, 2.5),
    ],
)
def test_wait_seconds(remaining: int, reset: float, expected: float) -> None:
    """Waits only when two or fewer calls are left."""
    assert wait_seconds(remaining, reset, NOW) == pytest.approx(expected)


@pytest.fixture
def client_mock() -> Mock:
    """Create mock GitHub client."""
    return Mock(spec=GitHubClient)


async def test_does_not_sleep_with_quota_left(client_mock: Mock) -> None:
    """Proceeds immediately when enough quota is left."""
    client_mock.get_search_rate_limit.return_value = RateLimit(
        limit=30, remaining=25, reset=int(NOW) + 60
    )
    sleep = AsyncMock()
    governor = RateLimitGovernor(client=client_mock, clock=lambda: NOW, sleep=sleep)

    await governor.await_quota()

    sleep.assert_not_called()


async def test_sleeps_until_reset_plus_margin(client_mock: Mock) -> None:
    """Sleeps until the window resets, plus one second."""
    client_mock.get_search_rate_limit.return_value = RateLimit(
        limit=30, remaining=1, reset=int(NOW) + 10
    )
    sleep = AsyncMock()
    governor = RateLimitGovernor(client=client_mock, clock=lambda: NOW, sleep=sleep)

    await governor.await_quota()

    sleep.assert_awaited_once()
    assert sleep.await_args.args[0] == pytest.approx(11.0)
    client_mock.get_search_rate_limit.assert_awaited_once()


async def test_sleeps_fixed_time_when_reset_passed(client_mock: Mock) -> None:
    """Sleeps a fixed 2.5 seconds when the reset time is in the past."""
    client_mock.get_search_rate_limit.return_value = RateLimit(
        limit=30, remaining=0, reset=int(NOW) - 30
    )
    sleep = AsyncMock()
    governor = RateLimitGovernor(client=client_mock, clock=lambda: NOW, sleep=sleep)

    await governor.await_quota()

    sleep.assert_awaited_once_with(2.5)
