"""Runtime settings read from the environment.

All variables are optional; defaults point at the public Jolpica mirror of
the Ergast API.
"""

from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

AGENT_NAME = "f1-racing-agent"
AGENT_DESCRIPTION = (
    "Real-time Formula 1 racing data - schedules, standings, drivers, circuits, "
    "and race results. Powered by live F1 data."
)
DATA_SOURCE = "Jolpica Ergast F1 API (live)"

DEFAULT_API_BASE = "https://api.jolpi.ca/ergast/f1"
DEFAULT_LATEST_COMPLETE_SEASON = "2025"
DEFAULT_TIMEOUT_SECONDS = 30.0
CONNECT_TIMEOUT_SECONDS = 10.0


class Settings(BaseModel):
    """Agent configuration."""

    api_base: str = DEFAULT_API_BASE
    latest_complete_season: str = Field(DEFAULT_LATEST_COMPLETE_SEASON, pattern=r"^\d{4}$")
    timeout_seconds: float = Field(DEFAULT_TIMEOUT_SECONDS, gt=0)
    agent_domain: Optional[str] = None

    @field_validator("api_base")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"api_base must be an http(s) URL, got {value!r}")
        return value.rstrip("/")


def load_settings() -> Settings:
    """Build settings from F1_* environment variables."""
    timeout = os.environ.get("F1_HTTP_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
    try:
        timeout_seconds = float(timeout)
    except ValueError:
        raise ValueError(f"F1_HTTP_TIMEOUT must be a number of seconds, got {timeout!r}") from None

    return Settings(
        api_base=os.environ.get("F1_API_BASE", DEFAULT_API_BASE),
        latest_complete_season=os.environ.get("F1_LATEST_COMPLETE_SEASON", DEFAULT_LATEST_COMPLETE_SEASON),
        timeout_seconds=timeout_seconds,
        agent_domain=os.environ.get("F1_AGENT_DOMAIN") or None,
    )
