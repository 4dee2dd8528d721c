"""
Logging fixtures for testing.

Provides fixtures for loggers and log capturing.
"""

import io
import logging
from collections.abc import Generator

import pytest

from relreload.log import LogConfig, Logger, LoggerFactory


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """
    Remove loggers created by a test from the logging registry.

    Loggers are registered by name, so a test creating "/" with one config
    must not leak it into the next test.
    """
    yield

    for name in list(logging.root.manager.loggerDict.keys()):
        if name.startswith("/") or name.startswith("test"):
            del logging.root.manager.loggerDict[name]


@pytest.fixture
def log_config() -> LogConfig:
    """Trace level config without colors."""
    return LogConfig.from_params(level="trace", colors=False)


@pytest.fixture
def lg(log_config: LogConfig) -> Logger:
    """Root logger at trace level."""
    return LoggerFactory.create_root(log_config)


@pytest.fixture
def log_stream(lg: Logger) -> Generator[io.StringIO, None, None]:
    """
    Capture everything written through the root logger's handler.

    Yields:
        StringIO receiving formatted log lines
    """
    stream = io.StringIO()
    handler = lg.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    original = handler.setStream(stream)
    try:
        yield stream
    finally:
        handler.setStream(original)
