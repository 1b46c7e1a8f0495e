"""Main entry point and orchestration for github-pr-reviews."""

import argparse
import logging
import sys
from functools import partial
from typing import Optional

import pytz
from github import Github
from pydantic import ValidationError

from prreviews import __version__, setup_logging
from prreviews.config import Settings, load_settings
from prreviews.formatting import format_for_terminal
from prreviews.github import (
    DEFAULT_DAYS_BACK,
    MAX_DAYS_BACK,
    MIN_DAYS_BACK,
    create_github_client,
    get_fetcher,
    validate_days_back,
)
from prreviews.grouping import group_by_day

logger = logging.getLogger("prreviews.main")


class PRReviews:
    """Runs the fetch, group and format pipeline for one user."""

    def __init__(self, settings: Settings, github: Optional[Github] = None):
        """Initialize the pipeline.

        Args:
            settings: Application settings; must carry a GitHub token.
            github: Optional pre-built client, mainly for tests.
        """
        self.settings = settings
        client_factory = None
        if github is None:
            client_factory = partial(
                create_github_client,
                settings.github_token,
                base_url=settings.github_api_url,
                timeout=settings.request_timeout,
            )
            github = client_factory()
        self._github = github
        self.fetcher = get_fetcher(
            settings.fetch_mode, self._github, client_factory=client_factory
        )

    def build_report(self, username: str, days_back: int = DEFAULT_DAYS_BACK) -> str:
        """Build the terminal report for a user.

        Args:
            username: GitHub login to report on.
            days_back: Lookback window in days.

        Returns:
            Rendered report, or an empty string when there is no activity.
        """
        activities = self.fetcher.fetch(username, days_back)
        grouped = group_by_day(activities, tz=self.settings.timezone)
        logger.info(
            f"Found {len(activities)} activities for @{username}, "
            f"{sum(len(v) for v in grouped.values())} after grouping into {len(grouped)} days"
        )
        return format_for_terminal(grouped, title_width=self.settings.title_width)

    def close(self) -> None:
        """Close the GitHub client."""
        if hasattr(self, "_github"):
            self._github.close()

    def __enter__(self) -> "PRReviews":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def parse_days(value: str) -> int:
    """argparse type for the lookback window."""
    try:
        return validate_days_back(int(value))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"days must be a number between {MIN_DAYS_BACK} and {MAX_DAYS_BACK}"
        )


def parse_timezone(value: str) -> str:
    """argparse type for an IANA timezone name."""
    try:
        pytz.timezone(value)
    except pytz.UnknownTimeZoneError:
        raise argparse.ArgumentTypeError(f"unknown timezone: {value}")
    return value


def parse_width(value: str) -> int:
    """argparse type for the title column width."""
    try:
        width = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"width must be an integer, got {value!r}")
    if not 10 <= width <= 200:
        raise argparse.ArgumentTypeError("width must be between 10 and 200")
    return width


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gh-pr-reviews",
        description="Summarize a GitHub user's recent pull request reviews and comments",
        epilog="Make sure to set the GITHUB_TOKEN environment variable.",
    )
    parser.add_argument("username", help="GitHub username to report on")
    parser.add_argument(
        "days",
        nargs="?",
        type=parse_days,
        default=DEFAULT_DAYS_BACK,
        help=f"number of days to look back, {MIN_DAYS_BACK}-{MAX_DAYS_BACK} (default: {DEFAULT_DAYS_BACK})",
    )
    parser.add_argument(
        "--mode",
        choices=["events", "search"],
        help="discover activity from the event feed or from issue search (default: FETCH_MODE or events)",
    )
    parser.add_argument(
        "--width",
        type=parse_width,
        help="title column width (default: TITLE_WIDTH or 60)",
    )
    parser.add_argument(
        "--timezone",
        type=parse_timezone,
        help="timezone that defines day boundaries (default: TIMEZONE or UTC)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    username = args.username.strip().lstrip("@")
    if not username:
        parser.error("username must not be empty")

    try:
        settings = load_settings()
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    if args.mode:
        settings.fetch_mode = args.mode
    if args.width:
        settings.title_width = args.width
    if args.timezone:
        settings.timezone = args.timezone

    log_level = "DEBUG" if args.debug else settings.log_level
    setup_logging(log_level, log_format=settings.log_format)

    if not settings.has_token:
        print("GITHUB_TOKEN environment variable is required", file=sys.stderr)
        sys.exit(1)

    print(f"Fetching PR reviews for @{username} (last {args.days} days)...", file=sys.stderr)

    try:
        with PRReviews(settings) as app:
            report = app.build_report(username, args.days)
    except Exception as e:
        logger.debug("Report failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not report:
        print(f"No PR reviews or comments found for @{username} in the last {args.days} days.")
        return

    print("\n" + report)


if __name__ == "__main__":
    main()
