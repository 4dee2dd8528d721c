"""
Tests for Logger.

Tests key functionality including:
- Disabled loggers
- TRACE level
- Pre-populated and per-call extra fields
- Level checks through ancestor loggers
"""

import logging

import pytest

from relreload.log import LogConfig, Logger, LoggerFactory


class ListHandler(logging.Handler):
    """Handler collecting records."""

    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def handler():
    return ListHandler()


@pytest.mark.unit
class TestLogger:
    """Test Logger behavior."""

    def test_default_config(self):
        """Test a logger without config logs at info."""
        lg = Logger("test_default")

        assert lg.config == LogConfig()
        assert lg.get_level() == logging.INFO
        assert not lg.disabled

    def test_disabled(self, handler):
        """Test level False disables all output."""
        lg = Logger("test_disabled", LogConfig(level=False))
        lg.addHandler(handler)

        lg.critical("not emitted")

        assert lg.disabled
        assert not lg.isEnabledFor(logging.CRITICAL)
        assert handler.records == []

    def test_trace(self, handler):
        """Test TRACE records are emitted at trace level."""
        lg = Logger("test_trace", LogConfig.from_params("trace"))
        lg.addHandler(handler)

        lg.trace("refreshing", extra={"relationship": "books"})

        assert len(handler.records) == 1
        assert handler.records[0].levelno == 5
        assert handler.records[0].levelname == "TRACE"
        assert handler.records[0].relreload_extra == {"relationship": "books"}

    def test_trace_filtered(self, handler):
        """Test TRACE records are dropped at debug level."""
        lg = Logger("test_trace_filtered", LogConfig.from_params("debug"))
        lg.addHandler(handler)

        lg.trace("refreshing")

        assert handler.records == []

    def test_extra_merged(self, handler):
        """Test pre-populated extra fields are merged with per-call ones."""
        lg = Logger("test_extra", extra={"session": "s1", "model": "none"})
        lg.addHandler(handler)

        lg.info("reloaded", extra={"model": "Author--1"})

        assert handler.records[0].relreload_extra == {
            "session": "s1",
            "model": "Author--1",
        }

    def test_no_extra(self, handler):
        """Test records without extra fields carry an empty mapping."""
        lg = Logger("test_no_extra")
        lg.addHandler(handler)

        lg.info("reloaded")

        assert handler.records[0].relreload_extra == {}

    def test_set_level(self, handler):
        """Test setLevel takes effect after a cached level check."""
        lg = Logger("test_set_level", LogConfig.from_params("info"))
        lg.addHandler(handler)
        assert not lg.isEnabledFor(logging.DEBUG)

        lg.setLevel(logging.DEBUG)
        lg.debug("now visible")

        assert len(handler.records) == 1

    def test_invalid_extra_reported(self, capsys):
        """Test a record that cannot be built is reported on stderr."""
        lg = Logger("test_invalid_extra")

        lg.info("reloaded", extra=5)

        assert "LOG_FORMAT_ERROR [test_invalid_extra]" in capsys.readouterr().err


@pytest.mark.unit
class TestViewLogger:
    """Test derived view loggers."""

    def test_parent_level_applies(self):
        """Test a derived logger respects its parent's level."""
        root = LoggerFactory.create_root(LogConfig.from_params("warning"))
        child = LoggerFactory.derive(root, "reloader")

        assert not child.isEnabledFor(logging.INFO)
        assert child.isEnabledFor(logging.WARNING)

    def test_uses_root_handlers(self, handler):
        """Test records of a derived logger reach the root's handlers."""
        root = LoggerFactory.create_root(LogConfig.from_params("debug"))
        root.addHandler(handler)
        child = LoggerFactory.derive(root, ["sqla", "adapter"])

        child.info("refreshing")

        assert [r.name for r in handler.records] == ["/sqla/adapter"]
        assert child.handlers == []
