"""
SQLAlchemy adapter.

Describes instances of SQLAlchemy 2.x declarative models to the traversal
and reloads relationship attributes through an AsyncSession.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import sqlalchemy
import sqlalchemy.exc
from sqlalchemy.orm import MANYTOONE
from sqlalchemy.orm.attributes import NO_VALUE, set_committed_value

from ..exceptions import AdapterError, ReloadFailedError
from ..interface import ModelAdapter, RelationshipDescriptor, RelationshipKind
from ..log import LoggerFactory

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstanceState, Mapper


def _state(model: Any) -> InstanceState:
    try:
        return sqlalchemy.inspect(model)
    except sqlalchemy.exc.NoInspectionAvailable as e:
        raise AdapterError(
            "instance is not mapped", type=type(model).__name__
        ) from e


def _refresh_names(mapper: Mapper, name: str) -> list[str]:
    # a many-to-one loads through the local foreign key, which may be stale
    rel = mapper.relationships[name]
    if rel.direction is not MANYTOONE:
        return [name]
    names = [mapper.get_property_by_column(col).key for col in rel.local_columns]
    return names + [name]


class SQLAlchemyAdapter(ModelAdapter):
    """
    ModelAdapter over a SQLAlchemy AsyncSession.

    Many-to-one and one-to-one relationships (uselist=False) are belongs-to
    slots; collections are has-many slots. Reloads refresh the relationship
    attribute from the database. An AsyncSession does not allow concurrent
    operations, so reloads issued concurrently by the traversal are run one
    at a time.

    Example:
        >>> async with session_factory() as session:
        ...     author = await session.get(Author, 1)
        ...     adapter = SQLAlchemyAdapter(lg, session)
        ...     await reload_relationships(author, adapter, lg=lg)
    """

    def __init__(self, lg: Any, session: AsyncSession) -> None:
        """
        Initialize the adapter.

        Args:
            lg: Logger instance for adapter operations
            session: Session the reloaded instances belong to
        """
        if lg is None:
            raise ValueError("Logger cannot be None")
        if session is None:
            raise ValueError("Session cannot be None")

        self._lg = LoggerFactory.derive(lg, ["sqla", "adapter"])
        self._session = session
        self._lock = asyncio.Lock()

    @property
    def session(self) -> AsyncSession:
        return self._session

    def identity(self, model: Any) -> tuple[str, Any]:
        """
        Get the mapped class name and primary key of an instance.

        Composite primary keys are joined with ",".

        Raises:
            AdapterError: If the instance is unmapped or has no identity yet
        """
        state = _state(model)
        type_name = state.mapper.class_.__name__
        if state.identity is None:
            raise AdapterError("instance has no identity", type=type_name)

        ident = state.identity
        if len(ident) == 1:
            return type_name, ident[0]
        return type_name, ",".join(str(v) for v in ident)

    def relationships(self, model: Any) -> Iterable[RelationshipDescriptor]:
        """Enumerate mapped relationships in mapper order."""
        for rel in _state(model).mapper.relationships:
            if rel.uselist:
                kind = RelationshipKind.HAS_MANY
            else:
                kind = RelationshipKind.BELONGS_TO
            yield RelationshipDescriptor(rel.key, kind)

    def get(self, model: Any, name: str) -> Any:
        """
        Get the loaded value of a relationship without emitting SQL.

        Returns None for a relationship that has not been loaded.
        """
        value = _state(model).attrs[name].loaded_value
        return None if value is NO_VALUE else value

    def set(self, model: Any, name: str, value: Any) -> None:
        """Set a relationship to a freshly loaded value without recording a change."""
        set_committed_value(model, name, value)

    def reload(self, model: Any, name: str) -> Any:
        """Return a coroutine refreshing one relationship attribute."""
        return self._refresh(model, name)

    async def _refresh(self, model: Any, name: str) -> Any:
        key = self.identity_key(model)
        async with self._lock:
            self._lg.trace("refreshing", extra={"model": key, "relationship": name})
            try:
                await self._session.refresh(
                    model, attribute_names=_refresh_names(_state(model).mapper, name)
                )
            except sqlalchemy.exc.SQLAlchemyError as e:
                raise ReloadFailedError(
                    "relationship refresh failed", model=key, relationship=name
                ) from e

        value = self.get(model, name)
        if _state(model).mapper.relationships[name].uselist:
            return list(value or ())
        return value
