"""
Traversal options.

Selects which relationship kinds are reloaded and which slots are skipped.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import pydantic

from .exceptions import ConfigError
from .interface import RelationshipDescriptor, RelationshipKind


def _parse_kind(value: Any) -> RelationshipKind:
    if isinstance(value, RelationshipKind):
        return value
    try:
        return RelationshipKind(value)
    except ValueError:
        raise ConfigError(
            "unknown relationship kind",
            kind=value,
            allowed=",".join(k.value for k in RelationshipKind),
        ) from None


@dataclass(frozen=True)
class ReloadOptions:
    """
    Options controlling which relationships a traversal reloads.

    Attributes:
        kinds: Relationship kinds to reload
        exclude: Type name to relationship names never reloaded
    """

    kinds: frozenset[RelationshipKind] = frozenset(RelationshipKind)
    exclude: Mapping[str, frozenset[str]] = field(default_factory=dict)

    @classmethod
    def from_params(
        cls,
        kinds: Iterable[RelationshipKind | str] | None = None,
        exclude: Mapping[str, Iterable[str]] | None = None,
    ) -> ReloadOptions:
        """
        Create options from plain values.

        Args:
            kinds: Kinds as enum members or their values ("belongsTo", "hasMany")
            exclude: Type name to relationship names

        Raises:
            ConfigError: If a kind is not recognized
        """
        resolved_kinds = (
            frozenset(RelationshipKind)
            if kinds is None
            else frozenset(_parse_kind(k) for k in kinds)
        )
        resolved_exclude = {
            type_name: frozenset(names) for type_name, names in (exclude or {}).items()
        }
        return cls(kinds=resolved_kinds, exclude=resolved_exclude)

    @classmethod
    def from_config(cls, config_dict: Any, section: str = "reload") -> ReloadOptions:
        """
        Create options from the reload section of a configuration mapping.

        Example:
            config = Config("etc/relreload.yaml")
            options = ReloadOptions.from_config(config)
        """
        from .config.schemas import TraversalConfig

        try:
            current = TraversalConfig(**(config_dict.get(section) or {}))
        except pydantic.ValidationError as e:
            raise ConfigError(
                "invalid reload configuration", section=section, errors=e.error_count()
            ) from e
        return cls.from_params(current.kinds, current.exclude)

    def should_reload(
        self,
        type_name: str,
        descriptor: RelationshipDescriptor,
        model_excluded: Iterable[str] = (),
    ) -> bool:
        """Decide whether one relationship slot of a model is reloaded."""
        if descriptor.kind not in self.kinds:
            return False
        if descriptor.name in model_excluded:
            return False
        return descriptor.name not in self.exclude.get(type_name, frozenset())
