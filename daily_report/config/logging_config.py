"""Logging configuration for the application."""

import logging
import os
from typing import Optional

from .paths import LOGS_DIR, ensure_dir

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

def get_log_level(level: Optional[str] = None) -> int:
    """Resolve a level name from the argument, then LOG_LEVEL, then INFO."""
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    if name not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: '{name}'. Valid levels are: {', '.join(VALID_LOG_LEVELS)}"
        )
    return getattr(logging, name)

def setup_logging(level: Optional[str] = None):
    """Setup application logging."""
    ensure_dir(LOGS_DIR)
    logging.basicConfig(
        level=get_log_level(level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        handlers=[
            logging.FileHandler(LOGS_DIR / "app.log", encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )
    return logging.getLogger("daily_report")
