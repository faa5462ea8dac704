"""
feedrelic/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

# Rows per egress request. Not configurable.
BATCH_SIZE = 100

# Rows rendered by the data preview. Not configurable.
PREVIEW_ROW_LIMIT = 5


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_float_env(name: str) -> float | None:
    """
    Read an optional positive float; unset, blank or invalid values yield None.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return None
    try:
        parsed = float(raw_value)
    except ValueError:
        return None
    return parsed if parsed > 0 else None


@dataclass(frozen=True)
class LoggingSettings:
    """
    Root logger settings.
    """

    level: str = "INFO"


@dataclass(frozen=True)
class TransmissionSettings:
    """
    Runtime settings for event transmission.

    ``timeout_seconds`` of None leaves the transport default in place.
    """

    batch_size: int = BATCH_SIZE
    timeout_seconds: float | None = None


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """
    Return cached logging settings from environment variables.
    """

    return LoggingSettings(level=_get_str_env("LOG_LEVEL", "INFO").upper())


@lru_cache(maxsize=1)
def get_transmission_settings() -> TransmissionSettings:
    """
    Return cached transmission settings from environment variables.
    """

    return TransmissionSettings(
        batch_size=BATCH_SIZE,
        timeout_seconds=_get_optional_float_env("FEEDRELIC_HTTP_TIMEOUT_SECONDS"),
    )
