"""Callback hooks for monitoring relationship reloads."""

from .hooks import HookContext, HookEvent, ObservabilityHooks

__all__ = ["ObservabilityHooks", "HookEvent", "HookContext"]
