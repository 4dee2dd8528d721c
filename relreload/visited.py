"""Per-traversal record of model instances already being reloaded."""

from collections.abc import Iterator
from typing import Any


class VisitedMap:
    """
    Identity-keyed map of instances registered during one traversal.

    An instance is registered before any of its relationships are reloaded,
    so later references to the same entity (including cyclic ones) resolve
    to the registered instance instead of starting a second reload.

    Example:
        >>> visited = VisitedMap()
        >>> await reload_relationships(author, adapter, visited)
        >>> "Author--1" in visited
        True
    """

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}

    @staticmethod
    def key(type_name: str, ident: Any) -> str:
        """Build the identity key "<type name>--<id>"."""
        return f"{type_name}--{ident}"

    def register(self, key: str, model: Any) -> None:
        """
        Register an instance under its identity key.

        Raises:
            KeyError: If the key is already registered
        """
        if key in self._entries:
            raise KeyError(f"already visited: {key}")
        self._entries[key] = model

    def get(self, key: str, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"VisitedMap({list(self._entries)!r})"
