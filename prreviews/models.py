"""Shared data models used across the fetch, grouping and formatting layers."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class ActivityAction(str, Enum):
    """Normalized review action."""

    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    COMMENTED = "COMMENTED"
    OTHER = "OTHER"

    @classmethod
    def from_state(cls, state: str | None) -> "ActivityAction":
        """Map a GitHub review state to an action.

        The event feed reports states in lower case ("approved") while the
        reviews endpoint uses upper case, so matching ignores case.
        """
        if not state:
            return cls.OTHER
        try:
            return cls(state.strip().upper())
        except ValueError:
            return cls.OTHER


ACTION_PRIORITY: dict[ActivityAction, int] = {
    ActivityAction.APPROVED: 3,
    ActivityAction.CHANGES_REQUESTED: 2,
    ActivityAction.COMMENTED: 1,
    ActivityAction.OTHER: 0,
}

ACTION_GLYPH: dict[ActivityAction, str] = {
    ActivityAction.APPROVED: "\u2705",
    ActivityAction.CHANGES_REQUESTED: "\u274c",
    ActivityAction.COMMENTED: "\U0001f4ac",
    ActivityAction.OTHER: "\U0001f441\ufe0f",
}


@dataclass
class Activity:
    """One review or comment action by a user on a pull request."""

    title: str
    url: str
    action: ActivityAction
    created_at: datetime
    source: str = ""

    def __post_init__(self) -> None:
        if self.created_at.tzinfo is None:
            self.created_at = self.created_at.replace(tzinfo=timezone.utc)

    @property
    def is_complete(self) -> bool:
        """Check that the activity has both a title and a URL."""
        return bool(self.title and self.url)

    @property
    def priority(self) -> int:
        return ACTION_PRIORITY[self.action]


# Calendar day (YYYY-MM-DD) -> activities, at most one per URL
DayBuckets = dict[str, list[Activity]]
