"""
Factory for creating and deriving loggers.

Logger names are slash separated paths. A root logger owns the console
handler; derived loggers are lightweight views that share it.
"""

import logging
import sys
from typing import Any, cast

from .config import LogConfig
from .formatters import LogFormatter
from .logger import Logger


class LoggerFactory:
    """Factory for creating and configuring loggers."""

    @staticmethod
    def create_root(config: LogConfig) -> Logger:
        """
        Create the "/" root logger.

        Example:
            >>> config = LogConfig.from_params(level="debug", colors=False)
            >>> lg = LoggerFactory.create_root(config)
            >>> lg.info("started")
            [12:34:56,789] [I] started                 [1234] [/]
        """
        return LoggerFactory.create("/", config)

    @staticmethod
    def create(
        name: str,
        config: LogConfig,
        extra: dict[str, Any] | None = None,
    ) -> Logger:
        """
        Create a logger with its own console handler.

        An already registered logger of the same name is returned as-is.

        Args:
            name: Logger name
            config: Logger configuration
            extra: Pre-populated extra fields included in every record

        Returns:
            Configured logger instance
        """
        existing = LoggerFactory._check_existing_logger(name)
        if existing:
            return existing

        lg = Logger(name, config, extra)
        handler = logging.StreamHandler(sys.stdout)
        if config.level is not False:
            handler.setLevel(config.level)
        handler.setFormatter(LogFormatter(config))
        lg.addHandler(handler)
        lg.propagate = False
        lg.parent = logging.root

        logging.root.manager.loggerDict[name] = lg
        return lg

    @staticmethod
    def _check_existing_logger(name: str) -> Logger | None:
        existing = logging.root.manager.loggerDict.get(name)
        if isinstance(existing, Logger):
            return existing
        return None

    @staticmethod
    def derive(parent: Logger, tags: str | list[str]) -> Logger:
        """
        Derive a view logger that delegates to the root's handlers.

        Examples:
            >>> derived = LoggerFactory.derive(root, "reloader")
            >>> derived.name
            '/reloader'

            >>> derived = LoggerFactory.derive(lg, ["sqla", "adapter"])
            >>> derived.name
            '/relreload/sqla/adapter'

        Args:
            parent: Parent logger
            tags: Single tag or list of tags forming the hierarchy

        Returns:
            Derived logger
        """
        if isinstance(tags, str):
            tags = [tags]

        prefix = parent.name if parent.name == "/" else parent.name + "/"
        name = prefix + "/".join(tags)

        existing = LoggerFactory._check_existing_logger(name)
        if existing:
            return existing

        root = parent._root_logger if parent._root_logger else parent
        lg = parent.__class__(name, LogConfig(level=parent.get_level()))
        lg.setLevel(logging.NOTSET)
        lg._root_logger = root
        lg.parent = parent
        lg.propagate = False

        logging.root.manager.loggerDict[name] = lg
        return cast(Logger, lg)
