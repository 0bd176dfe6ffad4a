"""Centralized configuration for multifield-search using Pydantic Settings."""

from functools import lru_cache
import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Settings only provide defaults. Every ranking call can still override the
    search defaults through its own ``SearchOptions``.
    """

    model_config = SettingsConfigDict(
        env_prefix="MULTIFIELD_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",  # Ignore extra env vars not defined in model
    )

    # Search defaults
    default_min_score: float = Field(default=0.3, ge=0.0, le=10.0, description="Default minimum result score")
    default_max_results: int | None = Field(default=None, ge=1, description="Default cap on returned results")
    default_require_all_terms: bool = Field(default=False, description="Require every query term to match")

    # Extraction
    strict_extractors: bool = Field(
        default=False,
        description="Propagate field extractor exceptions instead of searching the field as empty",
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")
    log_queries: bool = Field(default=False, description="Include raw query text in log records")

    # Observability
    metrics_enabled: bool = Field(default=True, description="Record Prometheus search metrics")
    tracing_enabled: bool = Field(default=True, description="Wrap ranking passes in OpenTelemetry spans")
    service_name: str = Field(default="multifield-search", description="Service name reported to tracing")

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        normalized = str(v).strip().lower()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {v}. Must be one of: {', '.join(_LOG_LEVELS)}")
        return normalized

    def get_log_level(self) -> int:
        """Return the numeric logging level."""
        return getattr(logging, self.log_level.upper())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return process-wide settings, loaded once.

    Call ``get_settings.cache_clear()`` to reload after the environment changes.
    """
    return Settings()
