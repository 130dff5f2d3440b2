"""Configuration management for planboard.

Settings come from ``PLANBOARD_*`` environment variables, an optional ``.env``
file, or keyword arguments, validated with Pydantic Settings.
"""

from __future__ import annotations

import re
from datetime import date
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from planboard.core.types import SnapshotBackendKind

DEFAULT_API_BASE_URL = "http://localhost:5501/api"
DEFAULT_SNAPSHOT_KEY = "planboard.snapshot"
DEFAULT_TIMELINE_EPOCH = date(2026, 1, 8)

_URL_RE = re.compile(r"^https?://[a-zA-Z0-9.\-]+(:[0-9]{1,5})?(/.*)?$")
_KEY_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._:\-]{0,127}$")


def _default_snapshot_dir() -> Path:
    return Path("~/.local/state/planboard").expanduser()


class PlanboardConfig(BaseSettings):
    """Main configuration for planboard.

    Example:
        ```python
        # PLANBOARD_API_BASE_URL=https://pm.example.com/api
        # PLANBOARD_SNAPSHOT_BACKEND=redis
        # PLANBOARD_REDIS_URL=redis://localhost:6379/0
        config = PlanboardConfig()

        # Or programmatically
        config = PlanboardConfig(snapshot_backend="memory", enable_remote=False)
        ```

    Attributes:
        api_base_url: Base URL of the REST collaborator
        snapshot_backend: Where the local snapshot lives
        timeline_epoch: Left edge of the timeline viewport
        timeline_weeks: Number of week columns in the viewport
    """

    model_config = SettingsConfigDict(
        env_prefix="PLANBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    ##############
    # Remote API #
    ##############

    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Base URL of the task REST API",
    )

    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Per-request timeout in seconds",
    )

    enable_remote: bool = Field(
        default=True,
        description="Try the remote API when no local snapshot exists",
    )

    ##################
    # Local snapshot #
    ##################

    snapshot_backend: SnapshotBackendKind = Field(
        default=SnapshotBackendKind.FILE,
        description="Storage for the local snapshot",
    )

    snapshot_key: str = Field(
        default=DEFAULT_SNAPSHOT_KEY,
        description="Fixed key the snapshot bundle is stored under",
    )

    snapshot_dir: Path = Field(
        default_factory=_default_snapshot_dir,
        description="Directory for the FILE snapshot backend",
    )

    redis_url: str | None = Field(
        default=None,
        description="Redis connection URL for the REDIS snapshot backend",
    )

    ############
    # Timeline #
    ############

    timeline_epoch: date = Field(
        default=DEFAULT_TIMELINE_EPOCH,
        description="Calendar date at the left edge of the timeline",
    )

    timeline_weeks: int = Field(
        default=7,
        ge=1,
        le=52,
        description="Week columns shown in the timeline",
    )

    ######
    # UI #
    ######

    default_task_days: int = Field(
        default=5,
        ge=0,
        description="Span of a freshly opened create form, in days",
    )

    notice_ttl_seconds: float = Field(
        default=3.0,
        ge=0,
        description="Auto-dismiss delay for notices (0 keeps them until dismissed)",
    )

    ##############
    # Validators #
    ##############

    @field_validator("api_base_url", mode="before")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Strip the trailing slash and require an http(s) URL."""
        url = str(v).strip().rstrip("/")
        if not _URL_RE.match(url):
            raise ValueError("api_base_url must be an http:// or https:// URL")
        return url

    @field_validator("snapshot_key")
    @classmethod
    def validate_snapshot_key(cls, v: str) -> str:
        """The key doubles as a file name, so keep it path-safe."""
        if not _KEY_RE.match(v):
            raise ValueError(
                "snapshot_key must start with a letter or digit and contain only "
                "letters, digits, '.', '_', ':' and '-'"
            )
        return v

    @model_validator(mode="after")
    def validate_configuration(self) -> PlanboardConfig:
        """Cross-field checks, run at construction time."""
        if self.snapshot_backend == SnapshotBackendKind.REDIS and not self.redis_url:
            raise ValueError("snapshot_backend=redis requires redis_url to be set")
        return self

    def __str__(self) -> str:
        """String representation with masked secrets."""
        result = super().__repr__()
        return re.sub(r"://([^:/@\s']+):([^@\s']+)@", r"://\1:***@", result)


__all__ = [
    "DEFAULT_API_BASE_URL",
    "DEFAULT_SNAPSHOT_KEY",
    "DEFAULT_TIMELINE_EPOCH",
    "PlanboardConfig",
]
