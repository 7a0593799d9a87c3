"""
Configuration management for FPL Edge using pydantic-settings.

Environment variables are loaded from .env file and validated at startup.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FPLSettings(BaseSettings):
    """Upstream FPL API settings."""

    base_url: str = Field(
        default="https://fantasy.premierleague.com/api",
        description="FPL API base URL",
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")

    model_config = SettingsConfigDict(env_prefix="FPL_")


class SearchSettings(BaseSettings):
    """SearXNG search backend settings."""

    url: str = Field(
        default="http://localhost:8080",
        description="SearXNG base URL (SEARXNG_URL)",
    )
    timeout: float = Field(default=10.0, gt=0, description="Search timeout in seconds")
    league: str = Field(default="EPL", description="League keyword added to news queries")

    model_config = SettingsConfigDict(env_prefix="SEARXNG_")

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URL so paths can be appended."""
        return v.rstrip("/")


class CacheSettings(BaseSettings):
    """Caching configuration."""

    analysis_ttl: int = Field(
        default=12 * 60 * 60,
        gt=0,
        description="Top picks analysis cache TTL in seconds (12 hours)",
    )

    model_config = SettingsConfigDict(env_prefix="CACHE_")


class AppSettings(BaseSettings):
    """General application settings."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    api_host: str = Field(default="127.0.0.1", description="API server host")
    api_port: int = Field(default=8000, description="API server port")
    streamlit_port: int = Field(default=8501, description="Streamlit server port")
    curated_path: Path | None = Field(
        default=None,
        description="Override path for the curated analysis dataset",
    )

    model_config = SettingsConfigDict(env_prefix="")


class Settings(BaseSettings):
    """Main settings class combining all configuration sections."""

    fpl: FPLSettings = Field(default_factory=FPLSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    app: AppSettings = Field(default_factory=AppSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings.
    """
    from dotenv import load_dotenv

    # Try to find and load .env from project root
    env_paths = [
        Path(".env"),
        Path(__file__).parent.parent.parent / ".env",  # fpl-edge/.env
    ]

    for env_path in env_paths:
        if env_path.exists():
            load_dotenv(env_path, override=True)
            break

    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for CLI and server entry points."""
    logging.basicConfig(
        level=level or get_settings().app.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
