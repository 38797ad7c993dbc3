"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    result_store_backend: str = "file"
    result_store_path: str = "data.json"
    result_store_url: str | None = None
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "analysis_results"
    poll_interval_seconds: float = 2.0
    fallback_timeout_seconds: float = 30.0
    processing_seconds: float = 12.0
    max_image_bytes: int = 10 * 1024 * 1024
    cors_allowed_origins: str = "*"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse allowed CORS origins from env."""
    if raw is None:
        return []
    cleaned = raw.strip()
    if cleaned == "*":
        return ["*"]
    return [chunk.strip() for chunk in cleaned.split(",") if chunk.strip()]
