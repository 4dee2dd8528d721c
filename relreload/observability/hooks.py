"""
Observability hooks for monitoring relationship reloads.

A callback registry the traversal triggers at well defined points, so
callers can collect timings or counts without wrapping adapters.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..log import Logger, default_logger


class HookEvent(Enum):
    """Event types for observability hooks."""

    TRAVERSAL_START = "traversal_start"
    TRAVERSAL_END = "traversal_end"
    RELATIONSHIP_RELOADED = "relationship_reloaded"
    VISITED_HIT = "visited_hit"


@dataclass
class HookContext:
    """Context information passed to observability hooks."""

    event: HookEvent
    timestamp: float = field(default_factory=time.time)
    data: dict[str, Any] = field(default_factory=dict)

    model_key: str | None = None
    relationship: str | None = None
    duration: float | None = None
    error: BaseException | None = None


class ObservabilityHooks:
    """
    Callback registry for traversal events.

    Example:
        hooks = ObservabilityHooks()

        @hooks.on(HookEvent.RELATIONSHIP_RELOADED)
        def record(ctx: HookContext) -> None:
            timings[ctx.relationship] = ctx.duration

        await reload_relationships(author, adapter, hooks=hooks)
    """

    def __init__(self, lg: Logger | None = None) -> None:
        """
        Initialize the hooks registry.

        Args:
            lg: Logger used to report failing callbacks
        """
        self._lg = lg or default_logger()
        self._hooks: dict[HookEvent, list[Callable[[HookContext], None]]] = {}
        self._global_hooks: list[Callable[[HookContext], None]] = []
        self._enabled: bool = True

    def register(
        self, event: HookEvent, callback: Callable[[HookContext], None]
    ) -> None:
        """Register a callback for a specific event."""
        self._hooks.setdefault(event, []).append(callback)

    def on(self, event: HookEvent) -> Callable:
        """Decorator for registering event callbacks."""

        def decorator(callback: Callable[[HookContext], None]) -> Callable:
            self.register(event, callback)
            return callback

        return decorator

    def register_global(self, callback: Callable[[HookContext], None]) -> None:
        """Register a callback that receives all events."""
        self._global_hooks.append(callback)

    def unregister(
        self, event: HookEvent, callback: Callable[[HookContext], None]
    ) -> bool:
        """
        Unregister a callback for a specific event.

        Returns:
            bool: True if callback was found and removed
        """
        if event in self._hooks and callback in self._hooks[event]:
            self._hooks[event].remove(callback)
            return True
        return False

    def clear(self, event: HookEvent | None = None) -> None:
        """Clear callbacks of one event, or all callbacks when event is None."""
        if event is None:
            self._hooks.clear()
            self._global_hooks.clear()
        elif event in self._hooks:
            self._hooks[event].clear()

    def trigger(self, event: HookEvent, **kwargs: Any) -> None:
        """
        Trigger all callbacks registered for an event.

        Keyword arguments matching HookContext fields populate those fields;
        all of them are also available in context.data. A callback raising
        an exception is reported and does not stop the others.
        """
        if not self._enabled:
            return

        known = {
            k: v
            for k, v in kwargs.items()
            if k in ("model_key", "relationship", "duration", "error")
        }
        context = HookContext(event=event, data=kwargs, **known)

        for callback in self._hooks.get(event, []) + self._global_hooks:
            try:
                callback(context)
            except Exception as e:
                self._lg.warning(
                    "observability hook failed",
                    extra={"event": event.value, "exception": e},
                )

    def enable(self) -> None:
        """Enable hook execution."""
        self._enabled = True

    def disable(self) -> None:
        """Disable hook execution."""
        self._enabled = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    def has_callbacks(self, event: HookEvent) -> bool:
        """Check if any callbacks would run for an event."""
        return bool(self._hooks.get(event)) or bool(self._global_hooks)
