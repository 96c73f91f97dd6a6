"""
Application settings.

Values come from environment variables prefixed with ``RETAIL_INSIGHTS_``
(or a local ``.env`` file), e.g.::

    RETAIL_INSIGHTS_DATA_SOURCE=supabase
    RETAIL_INSIGHTS_SUPABASE_URL=https://xyz.supabase.co
    RETAIL_INSIGHTS_SUPABASE_KEY=...
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the analytics engine and its CLI."""

    model_config = SettingsConfigDict(
        env_prefix="RETAIL_INSIGHTS_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "retail-insights"
    app_env: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Where row snapshots and analysis results live
    data_dir: Path = Path("data")

    # Upstream rows: local JSON snapshots or the hosted Supabase REST API
    data_source: Literal["snapshot", "supabase"] = "snapshot"
    supabase_url: str | None = None
    supabase_key: str | None = None

    # Response-time target (p95) and hard timeout for one analysis run
    sla_ms: int = Field(default=5000, gt=0)
    analysis_timeout_seconds: float = Field(default=30.0, gt=0)

    # Accepted analysis period, in days between start and end date
    min_period_days: int = Field(default=7, ge=0)
    max_period_days: int = Field(default=365, gt=0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
