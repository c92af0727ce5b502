"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Idears"
    environment: Literal["development", "staging", "production"] = "production"
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = "/api"

    # Database (single SQLite file)
    database_path: Path = Path("data") / "idears.db"
    database_busy_timeout: float = 30.0  # seconds a writer waits on a locked database

    @computed_field
    @property
    def database_url(self) -> str:
        """Get async database URL for the aiosqlite driver."""
        return f"sqlite+aiosqlite:///{self.database_path}"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Attachments
    upload_dir: Path = Path("uploads")
    max_upload_size_bytes: int = 50 * 1024 * 1024  # 50MB


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def sanitize_error(
    error: Exception,
    *,
    generic_message: str = "An internal error occurred.",
    settings: Settings | None = None,
) -> str:
    """
    Return a user-safe error message.

    In development, returns the full exception string for debugging.
    In staging/production, returns a generic message to avoid leaking internals.
    """
    settings = settings or get_settings()
    if settings.environment == "development":
        return str(error)
    return generic_message
