"""
Exception hierarchy for relationship reloading.

All errors raised by this package derive from RelReloadError so callers can
catch them with a single except clause. The traversal itself never wraps
errors raised by an adapter: whatever the first failing reload raises is what
the top-level call raises.
"""

from typing import Any


class RelReloadError(Exception):
    """
    Base exception for all relreload errors.

    Example:
        try:
            await reload_relationships(author, adapter)
        except RelReloadError as e:
            lg.error("reload failed", extra={"exception": e})
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ReloadFailedError(RelReloadError):
    """
    A relationship reload failed.

    Raised by adapters when the underlying ORM cannot re-fetch a
    relationship slot. Context usually carries the model key and the
    relationship name.
    """

    pass


class AdapterError(RelReloadError):
    """
    The adapter cannot describe a model instance.

    Examples:
        - Instance is not mapped by the ORM
        - Instance has no identity yet (transient, never flushed)
    """

    pass


class ConfigError(RelReloadError):
    """
    Configuration-related errors.

    Examples:
        - Config file not found or too large
        - Invalid YAML syntax
        - Value rejected by schema validation
    """

    pass
