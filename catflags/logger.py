"""Logger construction and the log levels the package understands."""

from __future__ import annotations

import logging
from enum import IntEnum

__all__ = ["LogLevel", "default_logger", "TRACE"]

# Finer than DEBUG; the standard library has no name for it.
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class LogLevel(IntEnum):
    """Log levels, from the most severe to the most verbose."""

    PANIC = 0
    FATAL = 1
    ERROR = 2
    WARN = 3
    INFO = 4
    DEBUG = 5
    TRACE = 6

    @property
    def logging_level(self) -> int:
        """The matching numeric level of the ``logging`` module."""
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS = {
    LogLevel.PANIC: logging.CRITICAL,
    LogLevel.FATAL: logging.CRITICAL,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.TRACE: TRACE,
}


def default_logger(level: LogLevel = LogLevel.WARN) -> logging.Logger:
    """Create a new, independent logger writing to stderr at ``level``."""
    logger = logging.Logger("catflags")
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(LogLevel(level).logging_level)
    return logger