"""
Configuration for the logging layer.

LogConfig is immutable so a logger's settings cannot drift once handlers
and formatters have been built from it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .constants import LogConstants
from .exceptions import InvalidLogLevelError


@dataclass(frozen=True)
class LogConfig:
    """
    Immutable logger configuration.

    Attributes:
        level: Numeric log level, or False to disable logging entirely
        micros: Append microseconds to timestamps
        colors: Emit ANSI colors
    """

    level: int | bool = logging.INFO
    micros: bool = False
    colors: bool = True

    @staticmethod
    def resolve_level(level: str | int | bool) -> int | bool:
        """
        Resolve a level given as name, number or bool.

        Raises:
            InvalidLogLevelError: If a level name is not recognized
        """
        if isinstance(level, bool):
            return logging.INFO if level else False
        if isinstance(level, str):
            if level.isnumeric():
                return int(level)
            name = level.lower()
            if name in LogConstants.LEVEL_NAMES:
                return LogConstants.LEVEL_NAMES[name]
            raise InvalidLogLevelError(level)
        return level

    @classmethod
    def from_params(
        cls,
        level: str | int | bool,
        micros: bool = False,
        colors: bool = True,
    ) -> LogConfig:
        """
        Create LogConfig from individual parameters.

        Args:
            level: Log level (name, numeric value, or False to disable logging)
            micros: Whether to show microsecond precision
            colors: Whether to enable colored output

        Returns:
            LogConfig instance
        """
        return cls(level=cls.resolve_level(level), micros=micros, colors=colors)

    @classmethod
    def from_config(cls, config_dict: Any, section: str = "logging") -> LogConfig:
        """
        Create LogConfig from a configuration mapping.

        Args:
            config_dict: Configuration mapping (e.g. a loaded Config)
            section: Dotted path of the logging section (default: "logging")

        Returns:
            LogConfig instance

        Example:
            config = Config("etc/relreload.yaml")
            log_config = LogConfig.from_config(config)
        """
        current = config_dict
        for part in section.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                current = {}
                break

        return cls.from_params(
            level=current.get("level", "info"),
            micros=current.get("micros", False),
            colors=current.get("colors", True),
        )
