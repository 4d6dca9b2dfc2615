"""Configuration for the notification synchronization client."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClearMode(str, Enum):
    """How the "clear all" action reaches the server."""

    HIDE = "hide"
    DELETE = "delete"
    LOCAL = "local"


class ClientSettings(BaseSettings):
    """Client options read from ``TOURNEY_CLIENT_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="TOURNEY_CLIENT_", extra="ignore")

    base_url: str = Field(default="http://localhost:8000", min_length=1)
    poll_interval_seconds: float = Field(default=30.0, gt=0)
    clear_mode: ClearMode = ClearMode.HIDE
    storage_path: Path | None = Field(
        default=None,
        description="JSON file backing the dismissal flag; in-memory when unset",
    )
    request_timeout_seconds: float = Field(default=10.0, gt=0)


__all__ = ["ClearMode", "ClientSettings"]
