"""
Recursive relationship reloading.

Reloads every belongs-to and has-many relationship of a model instance
through a ModelAdapter, then descends into related instances that are
Reloadable. A VisitedMap shared by all recursive calls makes each entity
reload at most once per traversal and lets cyclic graphs terminate.

Example:
    adapter = SQLAlchemyAdapter(lg, session)
    author = await reload_relationships(author, adapter)
"""

import asyncio
import inspect
import time
from typing import Any

from .interface import ModelAdapter, RelationshipDescriptor, Reloadable
from .log import Logger, LoggerFactory, default_logger
from .observability import HookEvent, ObservabilityHooks
from .options import ReloadOptions
from .visited import VisitedMap


class Reloader:
    """
    Reloads the relationship graph reachable from a model instance.

    Sibling relationships of one instance are reloaded concurrently and
    joined before the instance counts as done. The first failure raised
    anywhere in the graph propagates unchanged, after the siblings still
    running have finished; nothing is retried or cancelled.
    """

    def __init__(
        self,
        lg: Logger,
        adapter: ModelAdapter,
        options: ReloadOptions | None = None,
        hooks: ObservabilityHooks | None = None,
    ) -> None:
        """
        Initialize the reloader.

        Args:
            lg: Parent logger; the reloader logs to a derived "reloader" logger
            adapter: Adapter describing the ORM's model instances
            options: Which relationships to reload, defaults to all
            hooks: Optional observability hooks
        """
        if lg is None:
            raise ValueError("Logger cannot be None")
        if adapter is None:
            raise ValueError("Adapter cannot be None")

        self._lg = LoggerFactory.derive(lg, "reloader")
        self._adapter = adapter
        self._options = options or ReloadOptions()
        self._hooks = hooks

    @property
    def adapter(self) -> ModelAdapter:
        return self._adapter

    @property
    def options(self) -> ReloadOptions:
        return self._options

    async def reload(self, model: Any, visited: VisitedMap | None = None) -> Any:
        """
        Reload the relationships of a model and of everything reachable from it.

        Args:
            model: Instance whose relationships are reloaded
            visited: Visited map shared with an enclosing traversal; a fresh
                one is created when omitted

        Returns:
            The model, with relationship slots replaced in place, or the
            instance already registered under the model's identity in visited

        Raises:
            Exception: Whatever the first failing reload raised
        """
        if visited is None:
            visited = VisitedMap()

        key = self._adapter.identity_key(model)
        self._lg.debug("reloading relationships", extra={"model": key})
        self._trigger(HookEvent.TRAVERSAL_START, model_key=key)
        start = time.monotonic()

        try:
            result = await self._reload(model, visited)
        except Exception as e:
            self._lg.error(
                "relationship reload failed", extra={"model": key, "exception": e}
            )
            self._trigger(
                HookEvent.TRAVERSAL_END,
                model_key=key,
                duration=time.monotonic() - start,
                error=e,
            )
            raise

        duration = time.monotonic() - start
        self._lg.debug(
            "reloaded relationships",
            extra={
                "model": key,
                "visited": len(visited),
                "elapsed": f"{duration:.3f}s",
            },
        )
        self._trigger(
            HookEvent.TRAVERSAL_END,
            model_key=key,
            duration=duration,
            visited=len(visited),
        )
        return result

    async def _reload(self, model: Any, visited: VisitedMap) -> Any:
        type_name, ident = self._adapter.identity(model)
        key = VisitedMap.key(type_name, ident)

        # check and register without yielding to the loop in between
        if key in visited:
            self._lg.trace("already visited", extra={"model": key})
            self._trigger(HookEvent.VISITED_HIT, model_key=key)
            return visited[key]
        visited.register(key, model)

        excluded = model.no_reload if isinstance(model, Reloadable) else frozenset()
        pending: list[asyncio.Future] = []
        try:
            for descriptor in self._adapter.relationships(model):
                if not self._options.should_reload(type_name, descriptor, excluded):
                    continue

                reloading = self._adapter.reload(model, descriptor.name)
                if not inspect.isawaitable(reloading):
                    self._lg.trace(
                        "nothing to reload, keeping current value",
                        extra={"model": key, "relationship": descriptor.name},
                    )
                    continue

                pending.append(
                    asyncio.ensure_future(
                        self._settle(model, key, descriptor, reloading, visited)
                    )
                )
        except BaseException:
            await _drain(pending)
            raise

        await _join(pending)
        return model

    async def _settle(
        self,
        model: Any,
        key: str,
        descriptor: RelationshipDescriptor,
        reloading: Any,
        visited: VisitedMap,
    ) -> None:
        start = time.monotonic()
        reloaded = await reloading

        if descriptor.kind.plural:
            descending = [
                asyncio.ensure_future(self._descend(item, visited))
                for item in reloaded or ()
            ]
            value: Any = list(await _join(descending))
        else:
            value = await self._descend(reloaded, visited)

        self._adapter.set(model, descriptor.name, value)

        duration = time.monotonic() - start
        self._lg.trace(
            "reloaded relationship",
            extra={
                "model": key,
                "relationship": descriptor.name,
                "elapsed": f"{duration:.3f}s",
            },
        )
        self._trigger(
            HookEvent.RELATIONSHIP_RELOADED,
            model_key=key,
            relationship=descriptor.name,
            duration=duration,
        )

    async def _descend(self, item: Any, visited: VisitedMap) -> Any:
        # related instances that did not opt in pass through as reloaded
        if item is not None and self._adapter.supports_reload(item):
            return await self._reload(item, visited)
        return item

    def _trigger(self, event: HookEvent, **kwargs: Any) -> None:
        if self._hooks is not None:
            self._hooks.trigger(event, **kwargs)


async def _drain(pending: list[asyncio.Future]) -> None:
    if pending:
        await asyncio.wait(pending)


async def _join(pending: list[asyncio.Future]) -> list[Any]:
    """
    Join sibling tasks without cancelling any of them.

    When one fails, the others finish before the failure is raised; no task
    of the traversal is still running once the caller sees the error.
    """
    try:
        return await asyncio.gather(*pending)
    except BaseException:
        await _drain(pending)
        raise


async def reload_relationships(
    model: Any,
    adapter: ModelAdapter,
    visited: VisitedMap | None = None,
    *,
    lg: Logger | None = None,
    options: ReloadOptions | None = None,
    hooks: ObservabilityHooks | None = None,
) -> Any:
    """
    Reload the relationships of a model and of every Reloadable instance it reaches.

    Args:
        model: Instance whose relationships are reloaded
        adapter: Adapter describing the ORM's model instances
        visited: Visited map shared with an enclosing traversal
        lg: Logger, defaults to the package logger
        options: Which relationships to reload, defaults to all
        hooks: Optional observability hooks

    Returns:
        The model, refreshed in place
    """
    reloader = Reloader(lg or default_logger(), adapter, options, hooks)
    return await reloader.reload(model, visited)
