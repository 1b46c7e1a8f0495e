"""Group activities by calendar day, one entry per pull request."""

from typing import Iterable

import pytz

from prreviews.models import Activity, DayBuckets


def day_key(activity: Activity, tz: str = "UTC") -> str:
    """Get the YYYY-MM-DD day an activity falls on in the given timezone."""
    return activity.created_at.astimezone(pytz.timezone(tz)).date().isoformat()


def group_by_day(activities: Iterable[Activity], tz: str = "UTC") -> DayBuckets:
    """Bucket activities by day, keeping the most significant action per URL.

    When a URL appears more than once on the same day, the entry is replaced
    only by a strictly higher priority action, so ties keep the first one
    seen. Entries keep the position of the first occurrence of their URL.

    Args:
        activities: Activities in fetch order.
        tz: IANA timezone name that defines day boundaries.

    Returns:
        Mapping of day to deduplicated activities.
    """
    grouped: DayBuckets = {}
    # day -> url -> index into grouped[day]
    positions: dict[str, dict[str, int]] = {}

    for activity in activities:
        day = day_key(activity, tz)
        entries = grouped.setdefault(day, [])
        seen = positions.setdefault(day, {})

        index = seen.get(activity.url)
        if index is None:
            seen[activity.url] = len(entries)
            entries.append(activity)
        elif activity.priority > entries[index].priority:
            entries[index] = activity

    return grouped
