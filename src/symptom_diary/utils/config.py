"""Configuration management."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Data storage
    data_dir: Path = Field(default=Path("data"))

    # Analysis defaults for the CLI and web views
    default_timeframe_days: int = Field(default=30, ge=1)
    default_trend_weeks: int = Field(default=4, ge=1)

    # Logging
    log_level: str = Field(default="WARNING")

    # Web API bind address for diary-web
    web_host: str = Field(default="127.0.0.1")
    web_port: int = Field(default=8000, ge=1, le=65535)

    @property
    def entries_path(self) -> Path:
        return self.data_dir / "entries.json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
