"""Configuration management using pydantic-settings."""

from __future__ import annotations

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Schedule
    timezone: str = "Asia/Bangkok"
    ics_filename: str = "schedule.ics"

    # Google Calendar
    google_credentials_file: str = "credentials.json"
    google_token_file: str = "calendar-token.json"
    create_request_interval: float = 0.2
    shared_emails: str = ""  # comma separated attendee list

    # API Settings (for FastAPI mode)
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_key: str | None = None  # Optional API key for authentication

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
