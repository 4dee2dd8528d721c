"""
Configuration package.

This module provides:
- Config for loading YAML configuration with environment overrides
- Pydantic schemas validating the loaded configuration
"""

from .config import Config
from .constants import DEFAULT_ENV_PREFIX, MAX_CONFIG_SIZE_BYTES
from .schemas import LoggingConfig, RelReloadConfig, TraversalConfig, validate_config

__all__ = [
    "Config",
    "DEFAULT_ENV_PREFIX",
    "MAX_CONFIG_SIZE_BYTES",
    "LoggingConfig",
    "RelReloadConfig",
    "TraversalConfig",
    "validate_config",
]
