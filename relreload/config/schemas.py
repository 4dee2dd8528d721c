"""
Configuration schemas.

Pydantic models validating the structure of relreload.yaml.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..interface import RelationshipKind

_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "FALSE")


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str | bool = Field(default="info", description="Log level or false")
    micros: bool = Field(default=False, description="Show microsecond timestamps")
    colors: bool = Field(default=True, description="Emit ANSI colors")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: Any) -> Any:
        """Validate log level is a recognized level."""
        if isinstance(v, str) and v.upper() not in _LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(_LEVELS)}"
            )
        return v

    model_config = ConfigDict(extra="allow")


class TraversalConfig(BaseModel):
    """Configuration for relationship traversal."""

    kinds: list[str] = Field(
        default_factory=lambda: [k.value for k in RelationshipKind],
        description="Relationship kinds to reload",
    )
    exclude: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Type name to relationship names never reloaded",
    )

    @field_validator("kinds", mode="before")
    @classmethod
    def validate_kinds(cls, v: Any) -> Any:
        """Accept a single kind and reject unknown ones."""
        if isinstance(v, str):
            v = [v]
        allowed = [k.value for k in RelationshipKind]
        for kind in v:
            if kind not in allowed:
                raise ValueError(
                    f"Invalid relationship kind '{kind}'. "
                    f"Must be one of: {', '.join(allowed)}"
                )
        return v

    @field_validator("exclude", mode="before")
    @classmethod
    def validate_exclude(cls, v: Any) -> Any:
        """Accept a single relationship name per type."""
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ValueError("exclude must map type names to relationship names")
        return {
            k: [names] if isinstance(names, str) else names for k, names in v.items()
        }

    model_config = ConfigDict(extra="forbid")


class RelReloadConfig(BaseModel):
    """Complete relreload configuration schema."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    reload: TraversalConfig = Field(default_factory=TraversalConfig)

    model_config = ConfigDict(extra="allow")


def validate_config(config_dict: dict[str, Any]) -> RelReloadConfig:
    """
    Validate a configuration dictionary against the schema.

    Raises:
        pydantic.ValidationError: If configuration is invalid
    """
    return RelReloadConfig(**config_dict)
