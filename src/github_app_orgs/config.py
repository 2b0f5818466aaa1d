"""Runner environment settings.

Configuration is loaded from:
- environment variables set by the GitHub Actions runner
- and a local `.env` file (if present), which is handy when running the CLI
  outside of a workflow

The `app-id` and `private-key` action inputs are not settings; they are read
through :class:`github_app_orgs.host.ActionHost` so they follow the runner's
`INPUT_*` conventions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ActionSettings(BaseSettings):
    """Settings describing the runner environment.

    Environment variables:
    - RUNNER_DEBUG     (optional, "1" enables debug logging)
    - GITHUB_API_URL   (optional)
    - GITHUB_OUTPUT    (optional, set by the runner)
    - LOG_LEVEL        (optional)
    - LOG_FORMAT       (optional, "actions" or "json")

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `ActionSettings(_env_file=path_to_env)`.
    """

    runner_debug: bool = Field(
        default=False,
        validation_alias="RUNNER_DEBUG",
        description="Whether the workflow run has step debug logging enabled",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_API_URL",
        description="GitHub REST API base URL (useful for GitHub Enterprise Server)",
    )
    github_output: Path | None = Field(
        default=None,
        validation_alias="GITHUB_OUTPUT",
        description="File the runner collects step outputs from",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )
    log_format: Literal["actions", "json"] = Field(
        default="actions",
        validation_alias="LOG_FORMAT",
        description="Log rendering: workflow commands or one JSON object per line",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("github_output", mode="before")
    @classmethod
    def _empty_output_is_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("github_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
