"""
Tests for LogFormatter.

Tests key formatter functionality including:
- Padding and [key:value] extra fields
- Microsecond timestamps
- Colored output
"""

import logging
import re

import pytest

from relreload.log import LogConfig, LogConstants, LogFormatter

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def log_record():
    """Create basic log record."""
    record = logging.LogRecord(
        name="/relreload/reloader",
        level=logging.INFO,
        pathname="/path/to/file.py",
        lineno=42,
        msg="reloaded relationships",
        args=(),
        exc_info=None,
    )
    record.created = 1234567890.123456
    return record


# =============================================================================
# Test Plain Output
# =============================================================================


@pytest.mark.unit
class TestLogFormatter:
    """Test formatting without colors."""

    def test_message(self, log_record):
        """Test level letter, message and metadata."""
        formatter = LogFormatter(LogConfig(colors=False))

        output = formatter.format(log_record)

        assert "[I] reloaded relationships" in output
        assert output.endswith(f"[{log_record.process}] [/relreload/reloader]")

    def test_padding(self, log_record):
        """Test metadata starts at the rule width."""
        formatter = LogFormatter(LogConfig(colors=False))

        output = formatter.format(log_record)

        rule = LogConstants.DEFAULT_RULE_WIDTH
        assert output.index(f"[{log_record.process}]") == rule

    def test_extra_fields(self, log_record):
        """Test extra fields are sorted and rendered as [key:value]."""
        log_record.relreload_extra = {
            "visited": 3,
            "model": "Author--1",
            "exception": ValueError("boom"),
            "kinds": ["belongsTo", "hasMany"],
        }
        formatter = LogFormatter(LogConfig(colors=False))

        output = formatter.format(log_record)

        assert (
            "[exception:ValueError] [kinds:belongsTo,hasMany] "
            "[model:Author--1] [visited:3]"
        ) in output

    def test_long_message(self, log_record):
        """Test a message longer than the rule keeps one space before fields."""
        log_record.msg = "x" * 100
        formatter = LogFormatter(LogConfig(colors=False))

        output = formatter.format(log_record)

        assert "x" * 100 + f" [{log_record.process}]" in output

    def test_micros(self, log_record):
        """Test microseconds are appended to the timestamp."""
        formatter = LogFormatter(LogConfig(micros=True, colors=False))

        output = formatter.format(log_record)

        assert re.match(r"^\[[^\]]+,\d{6}\] \[I\]", output)
        assert output.index(f"[{log_record.process}]") == LogConstants.MICRO_RULE_WIDTH


# =============================================================================
# Test Colored Output
# =============================================================================


@pytest.mark.unit
class TestColoredFormatter:
    """Test formatting with colors."""

    def test_level_color(self, log_record):
        """Test the level color wraps the line."""
        formatter = LogFormatter(LogConfig(colors=True))

        output = formatter.format(log_record)

        assert output.startswith(LogConstants.LEVEL_COLORS[logging.INFO] + "m")
        assert output.endswith(LogConstants.RESET)

    def test_colored_fields(self, log_record):
        """Test extra values are rendered in bold."""
        log_record.relreload_extra = {"model": "Author--1"}
        formatter = LogFormatter(LogConfig(colors=True))

        output = formatter.format(log_record)

        bold = LogConstants.LEVEL_COLORS[logging.INFO] + ";1m"
        assert f"model[{bold}Author--1" in output

    def test_unknown_level_color(self, log_record):
        """Test levels without a color use the default color."""
        log_record.levelno = 42
        formatter = LogFormatter(LogConfig(colors=True))

        output = formatter.format(log_record)

        assert output.startswith(LogConstants.DEFAULT_COLOR + "m")
