"""Logging setup for scenario runs, driven by ``Settings.log_level`` and ``log_dir``."""
from __future__ import annotations

import logging
from pathlib import Path

from storefront_e2e.config.settings import Settings
from storefront_e2e.core.errors import DataValidationError

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_FILE_NAME = "e2e.log"

# Playwright's driver chatter drowns scenario steps at DEBUG.
_QUIET_LOGGERS = ("asyncio", "playwright")


def _level_number(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise DataValidationError(f"Unknown log level '{name}'")
    return level


def configure_logging(settings: Settings) -> Path:
    """Log to stderr and ``<log_dir>/e2e.log`` at ``settings.log_level``.

    Calling it again replaces the handlers installed by an earlier call.
    Returns the log file path.
    """
    level = _level_number(settings.log_level)
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    log_file = settings.log_dir / LOG_FILE_NAME

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))
    return log_file
