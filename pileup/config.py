"""
Configuration - Environment-driven defaults.

    PILEUP_LOG_LEVEL     level for the "pileup" logger (default WARNING)
    PILEUP_SHUFFLE_SEED  seed for sessions created without one (default unset)
"""

from __future__ import annotations
import logging
import os


PILEUP_LOG_LEVEL = os.getenv("PILEUP_LOG_LEVEL", "WARNING")


def shuffle_seed() -> int | None:
    """The configured default shuffle seed, or None for OS randomness."""
    raw = os.getenv("PILEUP_SHUFFLE_SEED")
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"PILEUP_SHUFFLE_SEED must be an integer, got {raw!r}") from e


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Set the package logger's level. Handlers are left to the host app."""
    logger = logging.getLogger("pileup")
    logger.setLevel(level if level is not None else PILEUP_LOG_LEVEL.upper())
    return logger
