"""Unified configuration settings for the dashboard client.

This module provides a centralized Settings class using Pydantic BaseSettings
for loading and validating all environment variables.

All configuration should be accessed through this module:
    from akavelog_ui.config.settings import get_settings
    settings = get_settings()
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Dashboard settings loaded from environment variables.

    Every variable is prefixed with ``AKAVELOG_`` (e.g. ``AKAVELOG_API_URL``)
    and may also be placed in a ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="AKAVELOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==================== Backend ====================
    api_url: str = Field(
        default="http://localhost:8080/api",
        description="Root URL of the ingestion server's REST API",
    )
    request_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Per-request timeout; unset means requests never time out",
    )

    # ==================== Polling ====================
    poll_interval_ms: int = Field(
        default=2000,
        gt=0,
        description="Interval between log/status polling ticks",
    )
    max_recent_logs: int = Field(
        default=200,
        gt=0,
        description="Size of the recent log window held by the client",
    )

    # ==================== Create form ====================
    default_input_type: str = Field(
        default="http",
        description="Input type whose schema drives the create form",
    )
    default_title: str = Field(
        default="my-http-input",
        description="Initial value of the create form's title",
    )

    # ==================== Logging ====================
    log_level: str = Field(
        default="INFO",
        description="Loguru level for the stderr sink",
    )

    @field_validator("api_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("AKAVELOG_API_URL must not be empty")
        return str(v).strip().rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        return str(v).upper()

    # ==================== Computed Properties ====================
    @property
    def poll_interval_seconds(self) -> float:
        return self.poll_interval_ms / 1000.0


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
