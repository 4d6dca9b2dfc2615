"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./tourney_hub.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing session tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        description="Number of minutes before session tokens expire",
        gt=0,
    )
    session_cookie_name: str = Field(
        default="tourney_session",
        description="Name of the httponly cookie carrying the session token",
        min_length=1,
    )
    app_timezone: str = Field(
        default="Asia/Kolkata",
        description="Timezone used to stamp and compare notification timestamps",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API with credentials",
    )
    notification_retention_hours: int = Field(
        default=24,
        description="Notifications older than this are removed by the cleanup job",
        gt=0,
    )
    notification_cleanup_interval_hours: int = Field(
        default=6,
        description="Interval between two runs of the cleanup job",
        gt=0,
    )
    scheduler_enabled: bool = Field(
        default=True,
        description="Start the background scheduler together with the application",
    )
    ws_require_session: bool = Field(
        default=True,
        description="Require the push channel auth message to match the session user",
    )

    @field_validator("secret_key")
    @classmethod
    def _reject_blank_secret(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("SECRET_KEY must not be blank")
        return value


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
