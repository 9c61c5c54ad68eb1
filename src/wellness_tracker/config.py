"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_dir: Path = Path(".wellness")
    timezone: str | None = None
    fasting_goal_hours: float = 16.0
    tick_interval_seconds: float = 1.0
    rollover_interval_seconds: float = 60.0
    default_daily_target: float = 2000.0
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_timezone(raw: str | None) -> str | None:
    """Normalize a configured timezone name, treating blanks as unset."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if cleaned in {"", "local"}:
        return None
    return cleaned
