"""Application configuration using Pydantic Settings."""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from glean_indexer.core.constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_DATASOURCE,
    DEFAULT_ENTITY,
    DEFAULT_SCHEDULE_FREQUENCY_MINUTES,
    DEFAULT_SCHEDULE_INITIAL_DELAY_SECONDS,
    DEFAULT_SCHEDULE_TIMEOUT_MINUTES,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: str = "dev"

    # Backstage
    app_base_url: str = "http://localhost:3000"
    techdocs_base_url: str = "http://localhost:7007/api/techdocs"
    catalog_base_url: str = "http://localhost:7007/api/catalog"
    techdocs_token: str = ""

    # Glean
    glean_api_base_url: str = "https://example-be.glean.com/api/index/v1"
    glean_token: str = ""
    glean_datasource: str = DEFAULT_DATASOURCE

    # Entity selection
    entity_source: Literal["fixed", "catalog"] = "fixed"
    default_entities: str = DEFAULT_ENTITY

    # Indexing
    batch_size: int = DEFAULT_BATCH_SIZE
    build_concurrency: int = DEFAULT_BATCH_SIZE
    http_timeout_seconds: float = 30.0

    # Schedule
    schedule_enabled: bool = True
    schedule_frequency_minutes: float = DEFAULT_SCHEDULE_FREQUENCY_MINUTES
    schedule_timeout_minutes: float = DEFAULT_SCHEDULE_TIMEOUT_MINUTES
    schedule_initial_delay_seconds: float = DEFAULT_SCHEDULE_INITIAL_DELAY_SECONDS

    # Logging
    log_level: str = "INFO"
    quiet_loggers: str = "httpx,httpcore"

    @field_validator("batch_size", "build_concurrency", "schedule_frequency_minutes", "schedule_timeout_minutes")
    @classmethod
    def _must_be_positive(cls, value):
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @field_validator("schedule_initial_delay_seconds")
    @classmethod
    def _must_not_be_negative(cls, value):
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @property
    def quiet_logger_names(self) -> list[str]:
        """Third-party loggers held at WARNING."""
        return [name.strip() for name in self.quiet_loggers.split(",") if name.strip()]

    @property
    def default_entity_refs(self) -> list[str]:
        """Entity refs listed in ``default_entities``."""
        return [ref.strip() for ref in self.default_entities.split(",") if ref.strip()]


# Global settings instance
settings = Settings()
