"""Tests for GitHub client construction and error translation."""

import logging
from unittest.mock import patch

import pytest
from github import GithubException

from prreviews.github.client import (
    GitHubAPIError,
    USER_AGENT,
    create_github_client,
    github_errors,
)


class TestGitHubAPIError:
    """Tests for GitHubAPIError."""

    def test_message_includes_status_and_reason(self):
        """Test the message carries status code and reason phrase."""
        error = GitHubAPIError(401, "Unauthorized", '{"message": "Bad credentials"}')
        assert str(error) == "GitHub API error: 401 Unauthorized"
        assert error.status == 401
        assert "Bad credentials" in error.body

    def test_message_without_reason(self):
        """Test an unknown reason leaves no trailing space."""
        assert str(GitHubAPIError(599)) == "GitHub API error: 599"


class TestGithubErrors:
    """Tests for the github_errors context manager."""

    def test_translates_github_exception(self):
        """Test GithubException becomes GitHubAPIError with the reason phrase."""
        with pytest.raises(GitHubAPIError) as exc_info:
            with github_errors():
                raise GithubException(422, {"message": "Validation Failed"}, None)

        assert exc_info.value.status == 422
        assert exc_info.value.reason == "Unprocessable Entity"
        assert isinstance(exc_info.value.__cause__, GithubException)

    def test_logs_response_body(self, caplog):
        """Test the response body is logged for diagnostics."""
        with caplog.at_level(logging.ERROR, logger="prreviews"):
            with pytest.raises(GitHubAPIError):
                with github_errors():
                    raise GithubException(401, {"message": "Bad credentials"}, None)

        assert "Bad credentials" in caplog.text

    def test_other_exceptions_pass_through(self):
        """Test unrelated exceptions are not translated."""
        with pytest.raises(KeyError):
            with github_errors():
                raise KeyError("missing")


class TestCreateGithubClient:
    """Tests for create_github_client."""

    @patch("prreviews.github.client.Github")
    @patch("prreviews.github.client.Auth")
    def test_client_settings(self, mock_auth, mock_github):
        """Test the client is authenticated, identified and never retries."""
        create_github_client("test-token", base_url="https://ghe.example.com/api/v3", timeout=10)

        mock_auth.Token.assert_called_once_with("test-token")
        kwargs = mock_github.call_args.kwargs
        assert kwargs["auth"] is mock_auth.Token.return_value
        assert kwargs["base_url"] == "https://ghe.example.com/api/v3"
        assert kwargs["timeout"] == 10
        assert kwargs["user_agent"] == USER_AGENT
        assert kwargs["per_page"] == 100
        assert kwargs["retry"] is None
