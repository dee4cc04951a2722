"""Configuration for the label sync CLI.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The token is read once at startup and handed to the client explicitly; it is
never refreshed.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LabelSyncSettings(BaseSettings):
    """Settings for the label sync CLI.

    Environment variables:
    - GITHUB_TOKEN                (optional, requests are unauthenticated without it)
    - GITHUB_BASE_URL             (optional)
    - LOG_LEVEL                   (optional)
    - LABEL_SYNC_MAX_WORKERS      (optional)
    - LABEL_SYNC_REQUEST_TIMEOUT  (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `LabelSyncSettings(_env_file=path_to_env)`.
    """

    github_token: str = Field(
        default="",
        validation_alias="GITHUB_TOKEN",
        description="Bearer token presented on every GitHub request",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    max_workers: int | None = Field(
        default=None,
        gt=0,
        validation_alias="LABEL_SYNC_MAX_WORKERS",
        description=(
            "Upper bound on concurrent label updates. "
            "Unset means one worker per label in the input file."
        ),
    )
    request_timeout: float | None = Field(
        default=None,
        gt=0,
        validation_alias="LABEL_SYNC_REQUEST_TIMEOUT",
        description="Per-request timeout in seconds (unset keeps the requests default)",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )
