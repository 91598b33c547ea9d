"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads optional environment variables (an input CSV to preload, and where and
how verbosely to log).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import logging
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_LOG_PATH = "logs/dashboard.log"


@dataclass(frozen=True)
class Settings:
    """Container for dashboard configuration read from the environment.

    Attributes:
        data_file: Optional CSV loaded on startup before any upload.
        log_path: File to append logs to, or None for stdout only.
        log_level: Numeric logging level.
    """
    data_file: Path | None
    log_path: Path | None
    log_level: int


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `DASHBOARD_LOG_LEVEL` is not a known logging level.
    """
    data_file = os.getenv("DASHBOARD_DATA_FILE", "").strip()
    log_path = os.getenv("DASHBOARD_LOG_PATH", DEFAULT_LOG_PATH).strip()
    level_name = os.getenv("DASHBOARD_LOG_LEVEL", "INFO").strip().upper()

    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise RuntimeError(
            f"DASHBOARD_LOG_LEVEL={level_name!r} is not a valid logging level "
            "(expected one of DEBUG, INFO, WARNING, ERROR, CRITICAL)."
        )

    return Settings(
        data_file=Path(data_file) if data_file else None,
        log_path=Path(log_path) if log_path else None,
        log_level=level,
    )
