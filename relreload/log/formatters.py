"""
Log formatter for the logging layer.

Renders records as:

    [12:34:56,789] [D] reloaded relationships       [model:Author--1] [1234] [/relreload]

Extra fields are sorted by key and appended after the padded message. An
"exception" extra field is rendered as its class name.
"""

import logging
from typing import Any

from .config import LogConfig
from .constants import LogConstants


def _format_value(key: str, value: Any) -> str:
    if key == "exception" and isinstance(value, BaseException):
        return value.__class__.__name__
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(str(v) for v in value)
    return str(value)


def _extra_fields(record: logging.LogRecord) -> list[tuple[str, str]]:
    extra = getattr(record, "relreload_extra", None)
    if not extra:
        return []
    return [(key, _format_value(key, extra[key])) for key in sorted(extra)]


class LogFormatter(logging.Formatter):
    """
    Formatter producing the bracketed single-line layout.

    Args:
        config: Logger configuration; micros and colors are read from it
    """

    def __init__(self, config: LogConfig) -> None:
        super().__init__(LogConstants.DEFAULT_FORMAT)
        self._config = config

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        """Format timestamp, optionally with microsecond precision."""
        s = super().formatTime(record, datefmt)
        if self._config.micros:
            micros = int((record.created % 1) * 1000000) % 1000
            s += f"{micros:03d}"
        return s

    def format(self, record: logging.LogRecord) -> str:
        """Format a record with padding, extra fields and metadata."""
        head = super().format(record)
        rule = (
            LogConstants.MICRO_RULE_WIDTH
            if self._config.micros
            else LogConstants.DEFAULT_RULE_WIDTH
        )
        fields = _extra_fields(record)
        meta = [str(record.process), record.name]

        if not self._config.colors:
            parts = [f"[{k}:{v}]" for k, v in fields] + [f"[{m}]" for m in meta]
            return head + " " * max(1, rule - len(head)) + " ".join(parts)

        return self._format_colored(record, head, rule, fields, meta)

    def _format_colored(
        self,
        record: logging.LogRecord,
        head: str,
        rule: int,
        fields: list[tuple[str, str]],
        meta: list[str],
    ) -> str:
        col = LogConstants.LEVEL_COLORS.get(record.levelno, LogConstants.DEFAULT_COLOR)
        bold = col + ";1m"
        col += "m"
        reset = LogConstants.RESET
        meta_col = LogConstants.META_COLOR + "m"

        parts = [f"{col}{k}[{bold}{v}{reset}{col}]" for k, v in fields]
        parts += [f"{meta_col}[{m}]" for m in meta]
        return (
            col + head + " " * max(1, rule - len(head)) + " ".join(parts) + reset
        )
