"""Activity discovery through the user's public event feed."""

import logging
from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from prreviews.github.base import BaseFetcher, as_utc
from prreviews.github.client import PER_PAGE
from prreviews.models import Activity, ActivityAction

logger = logging.getLogger("prreviews.github.events")


class PullRequestRef(BaseModel):
    """The pull request an event refers to."""

    title: Optional[str] = None
    html_url: Optional[str] = None


class IssueRef(PullRequestRef):
    """The issue an event refers to; pull_request is set when it is a PR."""

    pull_request: Optional[dict] = None


class ReviewRef(BaseModel):
    state: Optional[str] = None


class ReviewPayload(BaseModel):
    pull_request: Optional[PullRequestRef] = None
    review: Optional[ReviewRef] = None


class ReviewCommentPayload(BaseModel):
    pull_request: Optional[PullRequestRef] = None


class IssueCommentPayload(BaseModel):
    issue: Optional[IssueRef] = None


class PullRequestReviewEvent(BaseModel):
    """A submitted review; the action comes from the review state."""

    type: Literal["PullRequestReviewEvent"]
    created_at: datetime
    payload: ReviewPayload = Field(default_factory=ReviewPayload)

    def to_activity(self) -> Optional[Activity]:
        pull = self.payload.pull_request or PullRequestRef()
        state = self.payload.review.state if self.payload.review else None
        return Activity(
            title=pull.title or "",
            url=pull.html_url or "",
            action=ActivityAction.from_state(state),
            created_at=self.created_at,
            source=self.type,
        )


class PullRequestReviewCommentEvent(BaseModel):
    """A comment on a pull request diff."""

    type: Literal["PullRequestReviewCommentEvent"]
    created_at: datetime
    payload: ReviewCommentPayload = Field(default_factory=ReviewCommentPayload)

    def to_activity(self) -> Optional[Activity]:
        pull = self.payload.pull_request or PullRequestRef()
        return Activity(
            title=pull.title or "",
            url=pull.html_url or "",
            action=ActivityAction.COMMENTED,
            created_at=self.created_at,
            source=self.type,
        )


class IssueCommentEvent(BaseModel):
    """A conversation comment; only counts when the issue is a pull request."""

    type: Literal["IssueCommentEvent"]
    created_at: datetime
    payload: IssueCommentPayload = Field(default_factory=IssueCommentPayload)

    def to_activity(self) -> Optional[Activity]:
        issue = self.payload.issue
        if issue is None or issue.pull_request is None:
            return None
        return Activity(
            title=issue.title or "",
            url=issue.html_url or "",
            action=ActivityAction.COMMENTED,
            created_at=self.created_at,
            source=self.type,
        )


SourceEvent = Annotated[
    Union[PullRequestReviewEvent, PullRequestReviewCommentEvent, IssueCommentEvent],
    Field(discriminator="type"),
]

_source_event_adapter = TypeAdapter(SourceEvent)

SUPPORTED_EVENT_TYPES = frozenset(
    {"PullRequestReviewEvent", "PullRequestReviewCommentEvent", "IssueCommentEvent"}
)


def parse_event(raw: dict) -> Optional[SourceEvent]:
    """Parse a raw event into its typed variant.

    Returns:
        The typed event, or None for event types that carry no review activity
        or payloads that do not match the expected shape.
    """
    if raw.get("type") not in SUPPORTED_EVENT_TYPES:
        return None
    try:
        return _source_event_adapter.validate_python(raw)
    except ValidationError as e:
        logger.warning(f"Skipping malformed {raw.get('type')} event {raw.get('id', '?')}: {e}")
        return None


class EventFeedFetcher(BaseFetcher):
    """Reads review activity from /users/{username}/events.

    The feed only covers recent public events (GitHub caps it at 300 events
    and 90 days), so busy users may lose older items inside the window.
    """

    def _collect(self, username: str, cutoff: datetime) -> list[Activity]:
        user = self.github.get_user(username)

        activities = []
        stale_run = 0
        for event in user.get_events():
            # Feed order follows ingestion, not created_at, so one old event
            # does not end the window; a full page of them does
            if as_utc(event.created_at) <= cutoff:
                stale_run += 1
                if stale_run >= PER_PAGE:
                    break
                continue
            stale_run = 0

            parsed = parse_event(event.raw_data)
            if parsed is None:
                continue

            activity = parsed.to_activity()
            if activity is not None:
                activities.append(activity)

        return activities

    def describe_query(self, username: str, cutoff: datetime) -> str:
        return f"GET /users/{username}/events"

    @property
    def mode_name(self) -> str:
        return "events"
