"""Terminal rendering of grouped review activity."""

from datetime import date

from wcwidth import wcswidth, wcwidth

from prreviews.models import ACTION_GLYPH, DayBuckets

DEFAULT_TITLE_WIDTH = 60
ELLIPSIS = "…"

# Fixed English abbreviations so output does not depend on the process locale
WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def format_day_label(day: str) -> str:
    """Format a YYYY-MM-DD key as e.g. 'Thu 2025-01-16'."""
    parsed = date.fromisoformat(day)
    return f"{WEEKDAYS[parsed.weekday()]} {parsed.isoformat()}"


def _char_width(char: str) -> int:
    # Control characters report -1; they take no columns
    return max(wcwidth(char), 0)


def display_width(text: str) -> int:
    """Number of terminal columns text occupies (CJK and emoji count as two)."""
    width = wcswidth(text)
    if width < 0:
        return sum(_char_width(char) for char in text)
    return width


def fit_title(title: str, width: int = DEFAULT_TITLE_WIDTH) -> str:
    """Truncate or pad a title to exactly width terminal columns.

    A wide character that would straddle the ellipsis is dropped and the gap
    padded, so the result never exceeds width columns.
    """
    used = display_width(title)
    if used <= width:
        return title + " " * (width - used)

    kept = []
    used = 0
    for char in title:
        char_width = _char_width(char)
        if used + char_width > width - 1:
            break
        kept.append(char)
        used += char_width
    return "".join(kept) + ELLIPSIS + " " * (width - 1 - used)


def format_for_terminal(buckets: DayBuckets, title_width: int = DEFAULT_TITLE_WIDTH) -> str:
    """Render grouped activities, most recent day first.

    Args:
        buckets: Activities grouped by day.
        title_width: Width of the title column in terminal columns, so URLs line up.

    Returns:
        One line per activity, joined with newlines.
    """
    lines = []
    for day in sorted(buckets, reverse=True):
        label = format_day_label(day)
        for activity in buckets[day]:
            lines.append(
                f"[ {label} ] {ACTION_GLYPH[activity.action]} "
                f"{fit_title(activity.title, title_width)} {activity.url}"
            )
    return "\n".join(lines)
