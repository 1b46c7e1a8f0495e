"""GitHub activity fetch strategies."""

from datetime import datetime
from typing import Callable, Optional

from github import Github

from prreviews.github.base import (
    BaseFetcher,
    DEFAULT_DAYS_BACK,
    MAX_DAYS_BACK,
    MIN_DAYS_BACK,
    validate_days_back,
)
from prreviews.github.client import GitHubAPIError, create_github_client, github_errors
from prreviews.github.events import EventFeedFetcher
from prreviews.github.search import SearchFetcher

__all__ = [
    "BaseFetcher",
    "EventFeedFetcher",
    "SearchFetcher",
    "GitHubAPIError",
    "create_github_client",
    "github_errors",
    "get_fetcher",
    "validate_days_back",
    "DEFAULT_DAYS_BACK",
    "MIN_DAYS_BACK",
    "MAX_DAYS_BACK",
]

FETCH_MODES = {
    "events": EventFeedFetcher,
    "search": SearchFetcher,
}


def get_fetcher(
    mode: str,
    github: Github,
    clock: Optional[Callable[[], datetime]] = None,
    client_factory: Optional[Callable[[], Github]] = None,
) -> BaseFetcher:
    """Factory function to get the appropriate fetcher.

    Args:
        mode: Fetch mode name (events, search).
        github: Authenticated Github client.
        clock: Optional callable returning the current time.
        client_factory: Optional callable building one client per worker thread.

    Returns:
        Configured fetcher instance.

    Raises:
        ValueError: If mode is not supported.
    """
    if mode not in FETCH_MODES:
        raise ValueError(f"Unsupported fetch mode: {mode}")

    return FETCH_MODES[mode](github, clock=clock, client_factory=client_factory)
