"""
Runtime configuration.

Values come from environment variables (prefix EDUNEXUS_), optionally
provided through a .env file in the working directory or next to the
package. Anything missing or malformed falls back to the defaults below.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from edunexus.model import DEFAULT_COLOR

PACKAGE_DIR = Path(__file__).resolve().parent

DEFAULT_API_URL = "http://localhost:3000/api"


def _default_token_path() -> Path:
    return Path.home() / ".edunexus" / "session.json"


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    day_start_hour: int = 7
    day_end_hour: int = 22
    token_path: Path = _default_token_path()
    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    http_timeout: float = 15.0
    reminder_lead_minutes: int = 5
    max_dots: int = 3
    notice_seconds: float = 3.0
    default_color: str = DEFAULT_COLOR

    @property
    def day_total_hours(self) -> int:
        return self.day_end_hour - self.day_start_hour


def load_environment() -> None:
    """Load the first .env file found (working directory wins over package dir)."""
    for path in (Path(".env"), PACKAGE_DIR / ".env"):
        if path.exists():
            load_dotenv(dotenv_path=path, override=False)
            break


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def load_settings() -> Settings:
    load_environment()

    token_path = os.getenv("EDUNEXUS_TOKEN_PATH", "").strip()
    log_file = os.getenv("EDUNEXUS_LOG_FILE", "").strip()

    return Settings(
        api_url=(os.getenv("EDUNEXUS_API_URL", "").strip() or DEFAULT_API_URL).rstrip("/"),
        day_start_hour=_env_int("EDUNEXUS_DAY_START_HOUR", 7),
        day_end_hour=_env_int("EDUNEXUS_DAY_END_HOUR", 22),
        token_path=Path(token_path).expanduser() if token_path else _default_token_path(),
        log_level=(os.getenv("EDUNEXUS_LOG_LEVEL", "").strip() or "WARNING").upper(),
        log_file=Path(log_file).expanduser() if log_file else None,
        http_timeout=_env_float("EDUNEXUS_HTTP_TIMEOUT", 15.0),
        reminder_lead_minutes=_env_int("EDUNEXUS_REMINDER_LEAD_MINUTES", 5),
        max_dots=_env_int("EDUNEXUS_MAX_DOTS", 3),
        notice_seconds=_env_float("EDUNEXUS_NOTICE_SECONDS", 3.0),
        default_color=os.getenv("EDUNEXUS_DEFAULT_COLOR", "").strip() or DEFAULT_COLOR,
    )
