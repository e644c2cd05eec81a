"""
Logging setup for oasdelta.

All modules log under the ``oasdelta`` namespace (``oasdelta.matcher``,
``oasdelta.resolver``, ...). Nothing is configured on import; call
``configure_logger`` from an entry point.

Environment flags (optional):

    OASDELTA_LOG_LEVEL = "DEBUG" | "INFO" | "WARNING" | "ERROR"
        Default: "WARNING". Used when no explicit level is passed.
"""

import logging
import os

__all__ = [
    "LOGGER_NAME",
    "configure_logger",
    "get_logger",
    "level_from_env",
]

LOGGER_NAME = "oasdelta"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(suffix: str | None = None) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{suffix}" if suffix else LOGGER_NAME)


def level_from_env(default: int = logging.WARNING) -> int:
    val = os.getenv("OASDELTA_LOG_LEVEL")
    if val is None:
        return default
    level = logging.getLevelName(val.strip().upper())
    return level if isinstance(level, int) else default


def configure_logger(level: int | None = None) -> logging.Logger:
    """
    Ensure the package logger has a handler in case the app didn't configure logging.
    Safe to call multiple times.
    """
    logger = get_logger()
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level_from_env() if level is None else level)
    return logger
