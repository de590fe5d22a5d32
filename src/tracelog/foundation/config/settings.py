"""Environment-based configuration using pydantic-settings.

Example:
    >>> from tracelog.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.log.level
    'INFO'
    >>> settings.correlation.trace_id_key
    'traceID'

    # Or with environment variables:
    # TRACELOG_LOG_LEVEL=DEBUG
    # TRACELOG_CORRELATION_VENDOR_PREFIX=dd.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogSettings(BaseSettings):
    """Default structured logger configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TRACELOG_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARN", "ERROR", "DPANIC", "PANIC", "FATAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = Field(default=None, description="Force console colors (None = auto-detect)")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        if not isinstance(v, str):
            return v
        v = v.upper()
        return "WARN" if v == "WARNING" else v


class CorrelationSettings(BaseSettings):
    """Names of the trace-derived fields written on context binding."""

    model_config = SettingsConfigDict(
        env_prefix="TRACELOG_CORRELATION_",
        extra="ignore",
    )

    trace_id_key: Annotated[str, Field(min_length=1)] = "traceID"
    span_id_key: Annotated[str, Field(min_length=1)] = "spanID"
    vendor_prefix: str = Field(default="dd.", min_length=1, description="Prefix of the vendor alias fields")

    @computed_field
    @property
    def trace_id_keys(self) -> tuple[str, str]:
        return self.trace_id_key, f"{self.vendor_prefix}{self.trace_id_key}"

    @computed_field
    @property
    def span_id_keys(self) -> tuple[str, str]:
        return self.span_id_key, f"{self.vendor_prefix}{self.span_id_key}"


class TracelogSettings(BaseSettings):
    """Root settings for tracelog.

    Example environment variables:
        TRACELOG_NAME=api
        TRACELOG_ENVIRONMENT=production
        TRACELOG_LOG_FORMAT=json
        TRACELOG_CORRELATION_TRACE_ID_KEY=trace_id
    """

    model_config = SettingsConfigDict(
        env_prefix="TRACELOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    name: str = ""
    environment: Literal["development", "staging", "production"] = "production"

    log: LogSettings = Field(default_factory=LogSettings)
    correlation: CorrelationSettings = Field(default_factory=CorrelationSettings)

    @field_validator("environment", mode="before")
    @classmethod
    def _normalize_env(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v

    @computed_field
    @property
    def is_development(self) -> bool:
        """Development builds make dpanic raise."""
        return self.environment == "development"


@lru_cache(maxsize=1)
def get_settings() -> TracelogSettings:
    """Get the settings instance (cached)."""
    return TracelogSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
