"""GitHub client construction and API error translation."""

import json
import logging
from contextlib import contextmanager
from http import HTTPStatus
from typing import Iterator, Optional

from github import Auth, Github, GithubException

logger = logging.getLogger("prreviews.github.client")

DEFAULT_API_URL = "https://api.github.com"
USER_AGENT = "github-pr-reviews-cli"
PER_PAGE = 100


class GitHubAPIError(Exception):
    """Raised when the GitHub API answers a required call with a non-success status."""

    def __init__(self, status: Optional[int], reason: str = "", body: str = ""):
        self.status = status
        self.reason = reason
        self.body = body
        super().__init__(f"GitHub API error: {status} {reason}".rstrip())


def _reason_phrase(status: Optional[int]) -> str:
    if status is None:
        return ""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


def _body_text(data: object) -> str:
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return json.dumps(data, default=str)


@contextmanager
def github_errors() -> Iterator[None]:
    """Translate PyGithub status errors into GitHubAPIError.

    The response body is logged so the failure can be diagnosed; the raised
    error carries the status code and reason phrase.

    Raises:
        GitHubAPIError: If a GithubException escapes the block.
    """
    try:
        yield
    except GithubException as e:
        body = _body_text(e.data)
        logger.error(f"API Response: {body}")
        raise GitHubAPIError(e.status, _reason_phrase(e.status), body) from e


def create_github_client(
    token: str,
    base_url: str = DEFAULT_API_URL,
    timeout: int = 30,
) -> Github:
    """Build an authenticated GitHub client.

    Retries are disabled: a failed required call aborts the run.

    Args:
        token: GitHub personal access token.
        base_url: REST API base URL.
        timeout: Request timeout in seconds.

    Returns:
        Configured Github instance.
    """
    return Github(
        auth=Auth.Token(token),
        base_url=base_url,
        timeout=timeout,
        user_agent=USER_AGENT,
        per_page=PER_PAGE,
        retry=None,
    )
