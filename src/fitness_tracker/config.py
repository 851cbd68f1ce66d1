"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    oracle_provider: str = "gemini"
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    oracle_timeout_seconds: float = 20.0
    leaderboard_window_days: int = 7
    default_timezone: str = "UTC"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_oracle_provider(settings: Settings) -> str:
    """Return the oracle provider to use, falling back to whichever has a key."""
    provider = settings.oracle_provider.strip().lower()
    if provider == "openai" and settings.openai_api_key:
        return "openai"
    if provider == "gemini" and settings.gemini_api_key:
        return "gemini"
    if settings.gemini_api_key:
        return "gemini"
    if settings.openai_api_key:
        return "openai"
    return "none"
