"""Activity discovery through issue search and per-PR detail lookups."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any, Iterable, Optional

from github import Github
from github.PullRequest import PullRequest
from requests.exceptions import RequestException

from prreviews.github.base import BaseFetcher, as_utc
from prreviews.models import Activity, ActivityAction

logger = logging.getLogger("prreviews.github.search")

SEARCH_QUALIFIERS = ("reviewed-by", "commenter")
DETAIL_LISTINGS = ("get_reviews", "get_issue_comments", "get_review_comments")


def _authored_by(item: Any, login: str) -> bool:
    user = getattr(item, "user", None)
    return user is not None and (user.login or "").lower() == login


class SearchFetcher(BaseFetcher):
    """Finds PRs with `reviewed-by:` and `commenter:` searches, then lists the
    user's own reviews and comments on each.

    Search matches PRs *updated* in the window, so it reaches PRs the event
    feed has already dropped, at the cost of one detail lookup per PR.

    A PyGithub client is not safe to share between threads, so with a
    client_factory every worker thread builds and uses its own client. Without
    one, the searches and listings run one at a time on the shared client.
    """

    def build_queries(self, username: str, cutoff: datetime) -> list[str]:
        """Build the search queries for a user and cutoff.

        Args:
            username: GitHub login.
            cutoff: Start of the lookback window.

        Returns:
            One query per search qualifier.
        """
        since = cutoff.date().isoformat()
        return [
            f"is:pr {qualifier}:{username} updated:>={since}"
            for qualifier in SEARCH_QUALIFIERS
        ]

    def _collect(self, username: str, cutoff: datetime) -> list[Activity]:
        queries = self.build_queries(username, cutoff)
        self._local = threading.local()
        self._worker_clients: list[Github] = []
        self._clients_lock = threading.Lock()

        try:
            with ThreadPoolExecutor(max_workers=self._pool_size(len(queries))) as executor:
                results = list(executor.map(self._search, queries))

            # Merge by URL, keeping the first hit
            pull_requests: dict[str, Any] = {}
            for issues in results:
                for issue in issues:
                    if issue.html_url and issue.html_url not in pull_requests:
                        pull_requests[issue.html_url] = issue

            logger.debug(f"Search matched {len(pull_requests)} pull requests for @{username}")

            activities: list[Activity] = []
            with ThreadPoolExecutor(
                max_workers=self._pool_size(len(DETAIL_LISTINGS))
            ) as executor:
                for url, issue in pull_requests.items():
                    try:
                        activities.extend(self._collect_for_pull(executor, issue, username))
                    except RequestException as e:
                        logger.warning(f"Skipping {url}: detail lookup failed: {e}")
        finally:
            self._close_worker_clients()

        # Newest first, matching the event feed
        activities.sort(key=lambda a: a.created_at, reverse=True)
        return activities

    def _pool_size(self, tasks: int) -> int:
        return tasks if self._client_factory else 1

    def _worker_github(self) -> Optional[Github]:
        """Return this thread's own client, building it on first use."""
        if self._client_factory is None:
            return None
        client = getattr(self._local, "github", None)
        if client is None:
            client = self._client_factory()
            self._local.github = client
            with self._clients_lock:
                self._worker_clients.append(client)
        return client

    def _close_worker_clients(self) -> None:
        with self._clients_lock:
            clients, self._worker_clients = self._worker_clients, []
        for client in clients:
            client.close()
        if clients:
            logger.debug(f"Closed {len(clients)} worker clients")

    def _search(self, query: str) -> list[Any]:
        logger.debug(f"Searching issues: {query}")
        github = self._worker_github() or self.github
        return list(github.search_issues(query))

    def _list_details(self, pull: Any, listing: str) -> list[Any]:
        client = self._worker_github()
        if client is not None:
            pull = client.create_from_raw_data(PullRequest, pull.raw_data)
        return list(getattr(pull, listing)())

    def _collect_for_pull(
        self, executor: ThreadPoolExecutor, issue: Any, username: str
    ) -> list[Activity]:
        """List the user's reviews and comments on one pull request.

        Args:
            executor: Pool running the detail listings.
            issue: Search result for the pull request.
            username: GitHub login whose actions are kept.

        Returns:
            Activities for that pull request, unfiltered by time.
        """
        # The hit's client belongs to a search worker, idle once searches end
        pull = issue.as_pull_request()

        reviews, issue_comments, review_comments = [
            executor.submit(self._list_details, pull, listing)
            for listing in DETAIL_LISTINGS
        ]

        login = username.lower()
        activities = []

        for review in reviews.result():
            # Pending reviews have no submission time yet
            if not _authored_by(review, login) or review.submitted_at is None:
                continue
            activities.append(self._activity(
                issue, ActivityAction.from_state(review.state), review.submitted_at, "review"
            ))

        activities.extend(
            self._comment_activities(issue, issue_comments.result(), login, "issue_comment")
        )
        activities.extend(
            self._comment_activities(issue, review_comments.result(), login, "review_comment")
        )
        return activities

    def _comment_activities(
        self, issue: Any, comments: Iterable[Any], login: str, source: str
    ) -> list[Activity]:
        return [
            self._activity(issue, ActivityAction.COMMENTED, comment.created_at, source)
            for comment in comments
            if _authored_by(comment, login)
        ]

    @staticmethod
    def _activity(issue: Any, action: ActivityAction, when: datetime, source: str) -> Activity:
        return Activity(
            title=issue.title or "",
            url=issue.html_url or "",
            action=action,
            created_at=as_utc(when),
            source=source,
        )

    def describe_query(self, username: str, cutoff: datetime) -> str:
        return " + ".join(f"search '{q}'" for q in self.build_queries(username, cutoff))

    @property
    def mode_name(self) -> str:
        return "search"
