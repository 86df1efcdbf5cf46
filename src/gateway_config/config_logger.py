from __future__ import annotations

import sys
from loguru import logger
from gateway_config.core.config import get_app_settings


# Loguru's valid level names
_LOGURU_LEVELS = {
    "TRACE",
    "DEBUG",
    "INFO",
    "SUCCESS",
    "WARNING",
    "ERROR",
    "CRITICAL",
}


def resolve_log_level(level: str | None = None) -> str:
    """Return the effective level: CLI override, else application.log_level, else INFO."""
    candidate = (level or get_app_settings().log_level).upper()

    return candidate if candidate in _LOGURU_LEVELS else "INFO"


def init_logging(level: str | None = None) -> None:
    """
    Initialize Loguru with the settings-file or CLI override log level.
    Supports Loguru-specific levels: TRACE and SUCCESS.
    """
    effective = resolve_log_level(level)

    # Reset handlers
    logger.remove()

    logger.add(
        sys.stderr,
        level=effective,
        format="<level>{level:7}</level> | <level>{message}</level>",
        backtrace=False,
        diagnose=False,
    )

    logger.debug(f"Loguru initialized at level: {effective}")
