"""
Logging layer for relreload.

A thin extension of Python's standard logging:
- Custom TRACE level below DEBUG for per-relationship detail
- Structured extra fields rendered as [key:value]
- Slash separated logger names with derived "view" loggers
- Optional ANSI colors and microsecond timestamps
"""

import logging

from .config import LogConfig
from .constants import LogConstants
from .exceptions import InvalidLogLevelError, LogError
from .factory import LoggerFactory
from .formatters import LogFormatter
from .logger import Logger

logging.addLevelName(LogConstants.CUSTOM_LEVELS["TRACE"], "TRACE")

DEFAULT_LOGGER_NAME = "/relreload"


def default_logger() -> Logger:
    """
    Get the package logger used when callers do not pass one.

    Created on first use at warning level without colors, so library use
    stays quiet unless something goes wrong.
    """
    return LoggerFactory.create(
        DEFAULT_LOGGER_NAME, LogConfig.from_params("warning", colors=False)
    )


__all__ = [
    "DEFAULT_LOGGER_NAME",
    "InvalidLogLevelError",
    "LogConfig",
    "LogConstants",
    "LogError",
    "LogFormatter",
    "Logger",
    "LoggerFactory",
    "default_logger",
]
