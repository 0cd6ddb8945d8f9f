"""Application configuration management using Pydantic Settings.

This module defines the `Settings` class, which loads configuration parameters
from environment variables and a `.env` file. Conversion itself needs almost
no configuration (the default service name normally comes from the
OpenTelemetry resource environment); the settings cover the override knob,
logging, and CLI rendering.

The `get_settings` function provides a cached, singleton instance of the
configuration, ensuring consistent settings throughout the application.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict as _SettingsConfigDict


class Settings(BaseSettings):
    """Defines all application configuration parameters."""

    model_config = _SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Logging & runtime behavior
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    DEBUG: bool = Field(
        default=False,
        description="Enable verbose debug logging (overrides LOG_LEVEL with DEBUG)",
    )

    # Conversion
    DEFAULT_SERVICE_NAME: Optional[str] = Field(
        default=None,
        description=(
            "Fallback localEndpoint.serviceName for spans whose resource lacks "
            "service.name. Unset = derive from the default OpenTelemetry resource "
            "(OTEL_SERVICE_NAME / OTEL_RESOURCE_ATTRIBUTES)."
        ),
    )

    # CLI rendering
    OUTPUT_INDENT: int = Field(
        default=2,
        ge=0,
        description="JSON indent for CLI output (0 = compact single line)",
    )

    @field_validator("DEFAULT_SERVICE_NAME", mode="before")
    @classmethod
    def normalize_service_name(cls, v: Any) -> Optional[str]:
        """Trim whitespace and normalize blank -> None."""
        if v is None:
            return None
        if isinstance(v, str):
            trimmed = v.strip()
            return trimmed or None
        return None

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        if isinstance(v, str) and v.strip():
            return v.strip().upper()
        return "INFO"

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL


@lru_cache(maxsize=1)
def get_settings() -> Settings:  # pragma: no cover - trivial
    """Return a cached, singleton instance of the application settings."""
    return Settings()
