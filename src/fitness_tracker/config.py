"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_PLACEHOLDER_KEYS = {"", "changeme", "your_openai_api_key_here"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    ai_min_interval_seconds: float = 2.0
    ai_retry_attempts: int = 3
    ai_backoff_seconds: float = 1.0
    ai_cache_ttl_seconds: int = 3600
    ai_cache_max_entries: int = 256
    progress_window_days: int = 30
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_api_key(raw: str | None) -> str | None:
    """Return a usable API key, or None when unset or a placeholder."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if cleaned.lower() in _PLACEHOLDER_KEYS:
        return None
    return cleaned
