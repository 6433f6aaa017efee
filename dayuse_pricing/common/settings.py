"""
Application settings loaded from environment variables.
It covers the database location, the holiday calendar endpoint, upload limits and login policy.
Optional values carry defaults so a fresh checkout only needs the four required variables.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError

REQUIRED_ENV_VARS: Final[tuple[str, ...]] = (
    "PROJECT_NAME",
    "ENV",
    "LOG_LEVEL",
    "DATABASE_URL",
)

DEFAULT_HOLIDAY_API_BASE_URL: Final[str] = "https://holidays-jp.github.io/api/v1"


class Settings(BaseModel):
    """Typed runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    PROJECT_NAME: str
    ENV: str
    LOG_LEVEL: str
    DATABASE_URL: str
    HOLIDAY_API_BASE_URL: str = DEFAULT_HOLIDAY_API_BASE_URL
    HOLIDAY_REQUEST_TIMEOUT_SECONDS: int = 10
    HOTEL_CONFIG_PATH: str = "configs/hotels.yaml"
    CSV_MAX_FILE_BYTES: int = 5 * 1024 * 1024
    SESSION_DURATION_HOURS: int = 24
    LOGIN_MAX_ATTEMPTS: int = 5
    LOGIN_LOCKOUT_SECONDS: int = 30
    PASSWORD_MIN_LENGTH: int = 4


def load_settings(*, load_env: bool = True) -> Settings:
    """Load and validate environment settings from `.env` and process environment."""

    if load_env:
        load_dotenv()

    missing = [key for key in REQUIRED_ENV_VARS if not os.getenv(key)]
    if missing:
        missing_values = ", ".join(sorted(missing))
        raise RuntimeError(
            f"Missing required environment variables: {missing_values}. "
            "Populate these values in `.env` before starting the application."
        )

    try:
        return Settings.model_validate(dict(os.environ))
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached accessor for application settings."""

    return load_settings()
