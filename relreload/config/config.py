"""
Configuration loading.

Loads a YAML file into a dict, applies environment variable overrides and
validates the result against the pydantic schema.

Environment Variable Override Format:
    RELRELOAD_<SECTION>_<KEY>=value

Examples:
    RELRELOAD_LOGGING_LEVEL=debug
    RELRELOAD_RELOAD_KINDS=hasMany
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pydantic
import yaml  # type: ignore[import-untyped]

from ..exceptions import ConfigError
from .constants import DEFAULT_ENV_PREFIX, MAX_CONFIG_SIZE_BYTES
from .schemas import RelReloadConfig, validate_config


def _check_file_size(path: Path) -> None:
    file_size = os.path.getsize(path)
    if file_size > MAX_CONFIG_SIZE_BYTES:
        raise ConfigError(
            "configuration file too large",
            path=str(path),
            size=file_size,
            limit=MAX_CONFIG_SIZE_BYTES,
        )


def _load_yaml(path: Path) -> dict[str, Any]:
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError("invalid YAML", path=str(path)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("configuration root must be a mapping", path=str(path))
    return data


def _convert_env_value(value: str) -> bool | int | float | str | list | None:
    """Convert an environment variable string to the matching type."""
    if value.lower() in ("null", "none", ""):
        return None

    if value.lower() in ("true", "false"):
        return value.lower() == "true"

    if "," in value:
        return [_convert_env_value(v.strip()) for v in value.split(",")]

    try:
        if "." in value:
            return float(value)
        return int(value)
    except ValueError:
        pass

    return value


def _set_nested_value(data: dict, path: list[str], value: Any) -> None:
    current = data
    for part in path[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
    current[path[-1]] = value


class Config(dict):
    """
    Configuration mapping loaded from YAML with environment overrides.

    Only the first underscore-separated token after the prefix selects the
    section; the rest names the key, so RELRELOAD_LOGGING_LEVEL sets
    logging.level.

    Example:
        config = Config("etc/relreload.yaml")
        settings = config.validate()
        options = ReloadOptions.from_config(config)
    """

    def __init__(
        self,
        fname: str | Path | None = None,
        enable_env_overrides: bool = True,
        env_prefix: str = DEFAULT_ENV_PREFIX,
    ):
        """
        Initialize configuration, optionally from a YAML file.

        Args:
            fname: Path to the YAML configuration file, or None for defaults
            enable_env_overrides: Whether to apply environment variable overrides
            env_prefix: Prefix of overriding environment variables

        Raises:
            ConfigError: If the file is missing, too large or not valid YAML
        """
        super().__init__()
        self._enable_env_overrides = enable_env_overrides
        self._env_prefix = env_prefix
        self._config_path: Path | None = None

        data: dict[str, Any] = {}
        if fname is not None:
            path = Path(fname).resolve()
            if not path.is_file():
                raise ConfigError("configuration file not found", path=str(path))
            _check_file_size(path)
            self._config_path = path
            data = _load_yaml(path)

        self._apply(data)

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        enable_env_overrides: bool = False,
        env_prefix: str = DEFAULT_ENV_PREFIX,
    ) -> Config:
        """Create a configuration from an in-memory mapping."""
        config = cls(None, enable_env_overrides, env_prefix)
        config._apply(data)
        return config

    @property
    def path(self) -> Path | None:
        """Path of the loaded file, None when built from a dict."""
        return self._config_path

    def _apply(self, data: dict[str, Any]) -> None:
        self.clear()
        self.update(data)
        if self._enable_env_overrides:
            for key, value in self.get_env_overrides().items():
                _set_nested_value(self, key.split(".", 1), value)

    def get_env_overrides(self) -> dict[str, Any]:
        """
        Get environment variable overrides keyed by dotted config path.

        Returns:
            e.g. {"logging.level": "debug"}
        """
        if not self._enable_env_overrides:
            return {}

        overrides = {}
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(self._env_prefix):
                continue
            parts = env_key[len(self._env_prefix) :].lower().split("_", 1)
            if len(parts) != 2 or not all(parts):
                continue
            overrides[".".join(parts)] = _convert_env_value(env_value)
        return overrides

    def validate(self) -> RelReloadConfig:
        """
        Validate configuration against the schema.

        Returns:
            Validated RelReloadConfig

        Raises:
            ConfigError: If the configuration is invalid
        """
        try:
            return validate_config(dict(self))
        except pydantic.ValidationError as e:
            raise ConfigError(
                "invalid configuration",
                path=str(self._config_path) if self._config_path else None,
                errors=e.error_count(),
            ) from e
