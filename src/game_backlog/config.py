"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables with validation,
type coercion, and sensible defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SteamAPIConfig(BaseSettings):
    """Steam Store and Reviews API configuration."""

    model_config = SettingsConfigDict(env_prefix="STEAM_")

    store_url: str = Field(
        default="https://store.steampowered.com/api",
        description="Base URL for Steam Store API",
    )
    reviews_url: str = Field(
        default="https://store.steampowered.com/appreviews",
        description="Base URL for Steam Reviews API",
    )
    requests_per_minute: int = Field(
        default=40,
        ge=1,
        le=200,
        description="Rate limit for API requests per minute",
    )
    timeout_seconds: int = Field(
        default=30,
        ge=5,
        le=120,
        description="HTTP request timeout in seconds",
    )


class HLTBConfig(BaseSettings):
    """HowLongToBeat search configuration."""

    model_config = SettingsConfigDict(env_prefix="HLTB_")

    base_url: str = Field(
        default="https://howlongtobeat.com",
        description="Base URL for HowLongToBeat",
    )
    search_path: str = Field(
        default="/api/search",
        description="Path of the game search endpoint",
    )
    requests_per_minute: int = Field(
        default=30,
        ge=1,
        le=120,
        description="Rate limit for search requests per minute",
    )

    @field_validator("search_path")
    @classmethod
    def validate_search_path(cls, v: str) -> str:
        """Search path must be absolute so it can be joined to base_url."""
        if not v.startswith("/"):
            raise ValueError(f"search_path must start with '/': {v}")
        return v


class RetryConfig(BaseSettings):
    """Retry behavior configuration for external source clients."""

    model_config = SettingsConfigDict(env_prefix="RETRY_")

    max_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Maximum number of retry attempts",
    )
    base_delay_seconds: float = Field(
        default=1.0,
        ge=0.1,
        le=30.0,
        description="Base delay between retries (exponential backoff)",
    )
    max_delay_seconds: float = Field(
        default=60.0,
        ge=1.0,
        le=300.0,
        description="Maximum delay between retries",
    )
    exponential_base: float = Field(
        default=2.0,
        ge=1.5,
        le=4.0,
        description="Base for exponential backoff calculation",
    )


class EnrichmentConfig(BaseSettings):
    """Library enrichment and scoring configuration."""

    model_config = SettingsConfigDict(env_prefix="ENRICHMENT_")

    freshness_window_days: int = Field(
        default=7,
        ge=1,
        le=365,
        description="Days after which synced metadata is considered stale",
    )
    prior_weight: int = Field(
        default=100,
        ge=1,
        description="Number of virtual reviews backing the global prior score",
    )
    prior_score: int = Field(
        default=70,
        ge=0,
        le=100,
        description="Global prior review score (percent)",
    )
    sync_concurrency: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum items synced concurrently in a library sync",
    )


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    format: Literal["json", "console"] = Field(
        default="json",
        description="Log output format",
    )
    include_timestamp: bool = Field(
        default=True,
        description="Include timestamp in log entries",
    )


class Settings(BaseSettings):
    """
    Main application settings.

    Aggregates all configuration sections and provides
    a single entry point for configuration access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )

    # Sub-configurations
    steam: SteamAPIConfig = Field(default_factory=SteamAPIConfig)
    hltb: HLTBConfig = Field(default_factory=HLTBConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    enrichment: EnrichmentConfig = Field(default_factory=EnrichmentConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once
    and reused across the application.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
