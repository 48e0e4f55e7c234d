"""Configuration management from environment variables."""

import os
from datetime import time
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv

from goalsetting.utils.constants import (
    DEFAULT_APP_URL,
    DEFAULT_CONTACT_TTL,
    DEFAULT_EVENING_TIME,
    DEFAULT_EXTERNAL_CALL_TIMEOUT,
    DEFAULT_MORNING_TIME,
    DEFAULT_RECURRING_INTERVAL,
    DEFAULT_REMINDER_INTERVAL,
    DEFAULT_TIMEZONE,
)
from goalsetting.utils.time_utils import is_known_timezone, parse_time_of_day

# Load .env file if it exists
load_dotenv()

NOTIFIER_BACKENDS = ("email", "log")


def _int_env(name: str, default: int) -> int:
    """Read a positive integer variable, falling back to default when unset or invalid."""
    try:
        value = int(os.getenv(name, str(default)))
    except ValueError:
        return default
    return value if value > 0 else default


class Config:
    """Application configuration loaded from environment variables."""

    # Database
    DATABASE_PATH: Path = Path(os.getenv("DATABASE_PATH", "./data/goalsetting.db"))

    # Schedule
    TIMEZONE: str = os.getenv("TIMEZONE", DEFAULT_TIMEZONE)
    MORNING_TIME: time = parse_time_of_day(os.getenv("MORNING_TIME"), DEFAULT_MORNING_TIME)
    EVENING_TIME: time = parse_time_of_day(os.getenv("EVENING_TIME"), DEFAULT_EVENING_TIME)

    # Engine
    REMINDER_CHECK_INTERVAL: int = _int_env("REMINDER_CHECK_INTERVAL", DEFAULT_REMINDER_INTERVAL)
    RECURRING_CHECK_INTERVAL: int = _int_env("RECURRING_CHECK_INTERVAL", DEFAULT_RECURRING_INTERVAL)
    EXTERNAL_CALL_TIMEOUT: int = _int_env("EXTERNAL_CALL_TIMEOUT", DEFAULT_EXTERNAL_CALL_TIMEOUT)
    CONTACT_CACHE_TTL: int = _int_env(
        "CONTACT_CACHE_TTL", int(DEFAULT_CONTACT_TTL.total_seconds())
    )

    # Notifications
    NOTIFIER_BACKEND: Literal["email", "log"] = os.getenv("NOTIFIER_BACKEND", "email")  # type: ignore
    SMTP_HOST: str = os.getenv("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT: int = _int_env("SMTP_PORT", 587)
    SMTP_USER: str = os.getenv("SMTP_USER", "")
    SMTP_PASS: str = os.getenv("SMTP_PASS", "")
    FROM_EMAIL: str = os.getenv("FROM_EMAIL", "")
    FROM_NAME: str = os.getenv("FROM_NAME", "Goal Setting App")
    APP_URL: str = os.getenv("APP_URL", DEFAULT_APP_URL)

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration."""
        if cls.NOTIFIER_BACKEND not in NOTIFIER_BACKENDS:
            raise ValueError(
                f"NOTIFIER_BACKEND must be one of {', '.join(NOTIFIER_BACKENDS)}"
            )

        if cls.NOTIFIER_BACKEND == "email" and not cls.FROM_EMAIL:
            raise ValueError("FROM_EMAIL required when NOTIFIER_BACKEND=email")

        if not is_known_timezone(cls.TIMEZONE):
            raise ValueError(f"Unknown TIMEZONE {cls.TIMEZONE!r}")

        # Ensure database directory exists
        cls.DATABASE_PATH.parent.mkdir(parents=True, exist_ok=True)
