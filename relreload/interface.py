"""
ORM abstraction used by the traversal.

The traversal never touches model classes directly. Everything it needs
from the ORM goes through a ModelAdapter: the identity of an instance, its
relationship slots, reading and writing those slots, and requesting a
reload of one slot. Model types opt into recursive reload by inheriting the
Reloadable mixin.
"""

from __future__ import annotations

import abc
import enum
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, TypeGuard

if TYPE_CHECKING:
    from .log import Logger
    from .observability import ObservabilityHooks
    from .options import ReloadOptions
    from .visited import VisitedMap


class RelationshipKind(enum.Enum):
    """Kind of a relationship slot."""

    BELONGS_TO = "belongsTo"  # singular
    HAS_MANY = "hasMany"  # plural

    @property
    def plural(self) -> bool:
        return self is RelationshipKind.HAS_MANY


@dataclass(frozen=True)
class RelationshipDescriptor:
    """Metadata of one relationship slot, as reported by the adapter."""

    name: str
    kind: RelationshipKind


class Reloadable:
    """
    Capability mixin for models that support recursive relationship reload.

    Related instances are only descended into when their class inherits this
    mixin. It defines no metaclass, so it composes with ORM declarative
    bases.

    Attributes:
        no_reload: Names of relationships on this model that are never reloaded

    Example:
        class Author(Base, Reloadable):
            no_reload = frozenset({"audit_entries"})
    """

    no_reload: ClassVar[frozenset[str]] = frozenset()

    async def reload_relationships(
        self,
        adapter: ModelAdapter,
        visited: VisitedMap | None = None,
        *,
        lg: Logger | None = None,
        options: ReloadOptions | None = None,
        hooks: ObservabilityHooks | None = None,
    ) -> Any:
        """Reload this instance's relationships; see relreload.reload_relationships."""
        from .traversal import reload_relationships

        return await reload_relationships(
            self, adapter, visited, lg=lg, options=options, hooks=hooks
        )


def supports_reload(instance: Any) -> TypeGuard[Reloadable]:
    """Check whether an instance opted into recursive relationship reload."""
    return isinstance(instance, Reloadable)


class ModelAdapter(abc.ABC):
    """
    Abstract base class for ORM adapters.

    Implementations describe model instances of one ORM to the traversal.
    """

    @abc.abstractmethod
    def identity(self, model: Any) -> tuple[str, Any]:
        """
        Get the identity of a model instance.

        Returns:
            Tuple of (type name, identifier)

        Raises:
            AdapterError: If the instance has no identity
        """
        pass  # pragma: no cover

    @abc.abstractmethod
    def relationships(self, model: Any) -> Iterable[RelationshipDescriptor]:
        """
        Enumerate the relationship slots of a model instance.

        Returns:
            Descriptors in a stable order
        """
        pass  # pragma: no cover

    @abc.abstractmethod
    def get(self, model: Any, name: str) -> Any:
        """Get the current value of a relationship slot."""
        pass  # pragma: no cover

    @abc.abstractmethod
    def set(self, model: Any, name: str, value: Any) -> None:
        """Replace the value of a relationship slot."""
        pass  # pragma: no cover

    @abc.abstractmethod
    def reload(self, model: Any, name: str) -> Awaitable[Any] | None:
        """
        Request a reload of one relationship slot.

        Returns:
            An awaitable resolving to the related instance (belongs-to) or a
            sequence of related instances (has-many), or None when the ORM
            has nothing to reload and the current value stands
        """
        pass  # pragma: no cover

    def supports_reload(self, instance: Any) -> bool:
        """Check whether a related instance should be descended into."""
        return supports_reload(instance)

    def identity_key(self, model: Any) -> str:
        """Build the visited-map key of a model instance."""
        from .visited import VisitedMap

        type_name, ident = self.identity(model)
        return VisitedMap.key(type_name, ident)
