"""Configuration management for github-pr-reviews."""

from typing import Literal

import pytz
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # GitHub Authentication
    github_token: str = Field(
        default="",
        description="GitHub Personal Access Token used for API requests",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL (override for GitHub Enterprise)",
    )

    # Fetching
    fetch_mode: Literal["events", "search"] = Field(
        default="events",
        description="How activity is discovered: the public event feed or issue search",
    )
    request_timeout: int = Field(
        default=30,
        description="HTTP timeout for GitHub API requests in seconds",
        ge=1,
        le=300,
    )

    # Rendering
    title_width: int = Field(
        default=60,
        description="Display width of the PR title column",
        ge=10,
        le=200,
    )
    timezone: str = Field(
        default="UTC",
        description="Timezone used to decide which calendar day an activity belongs to",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Logging level",
    )
    log_format: Literal["text", "json"] = Field(
        default="text",
        description="Log output format: 'text' for human-readable, 'json' for structured",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a valid IANA timezone name."""
        try:
            pytz.timezone(v)
            return v
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {v}. Must be a valid IANA timezone name.")

    @field_validator("github_api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Validate the API URL is http(s) and strip any trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid GitHub API URL: {v}. Must start with http:// or https://")
        return v.rstrip("/")

    @property
    def has_token(self) -> bool:
        """Check whether a GitHub token is configured."""
        return bool(self.github_token.strip())


def load_settings() -> Settings:
    """Load and return application settings.

    Returns:
        Settings instance with values from environment.
    """
    return Settings()
