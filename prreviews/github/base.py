"""Base activity fetcher interface."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from github import Github

from prreviews.github.client import github_errors
from prreviews.models import Activity

logger = logging.getLogger("prreviews.github.base")

MIN_DAYS_BACK = 1
MAX_DAYS_BACK = 90
DEFAULT_DAYS_BACK = 7


def validate_days_back(days_back: int) -> int:
    """Check that a lookback window is within the supported range.

    Raises:
        ValueError: If days_back is not an integer in [1, 90].
    """
    if isinstance(days_back, bool) or not isinstance(days_back, int):
        raise ValueError(f"days must be an integer, got {days_back!r}")
    if not MIN_DAYS_BACK <= days_back <= MAX_DAYS_BACK:
        raise ValueError(
            f"days must be a number between {MIN_DAYS_BACK} and {MAX_DAYS_BACK}"
        )
    return days_back


def as_utc(value: datetime) -> datetime:
    """Return an aware datetime, treating naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseFetcher(ABC):
    """Abstract base class for activity fetch strategies."""

    def __init__(
        self,
        github: Github,
        clock: Optional[Callable[[], datetime]] = None,
        client_factory: Optional[Callable[[], Github]] = None,
    ):
        """Initialize fetcher.

        Args:
            github: Authenticated Github client.
            clock: Optional callable returning the current time (for tests).
            client_factory: Optional callable building a fresh client for
                work done on worker threads.
        """
        self.github = github
        self._clock = clock or _utcnow
        self._client_factory = client_factory

    def fetch(self, username: str, days_back: int = DEFAULT_DAYS_BACK) -> list[Activity]:
        """Fetch a user's review activity within the lookback window.

        Args:
            username: GitHub login to report on.
            days_back: Lookback window in days, 1 to 90.

        Returns:
            Activities strictly newer than now minus days_back, each with a
            title and URL.

        Raises:
            ValueError: If days_back is out of range.
            GitHubAPIError: If a required API call fails.
        """
        validate_days_back(days_back)
        cutoff = as_utc(self._clock()) - timedelta(days=days_back)

        logger.info(
            f"[{self.mode_name}] {self.describe_query(username, cutoff)} "
            f"(last {days_back} days, since {cutoff.isoformat()})"
        )

        with github_errors():
            activities = self._collect(username, cutoff)

        kept = [a for a in activities if a.is_complete and a.created_at > cutoff]
        logger.debug(f"Kept {len(kept)} of {len(activities)} activities for @{username}")
        return kept

    @abstractmethod
    def _collect(self, username: str, cutoff: datetime) -> list[Activity]:
        """Gather candidate activities; filtering happens in fetch()."""
        pass

    @abstractmethod
    def describe_query(self, username: str, cutoff: datetime) -> str:
        """Describe the API query this strategy runs.

        Returns:
            Human-readable description for logging.
        """
        pass

    @property
    @abstractmethod
    def mode_name(self) -> str:
        """Get the name of this fetch mode."""
        pass
