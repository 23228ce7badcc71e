"""Resolve component names and variant keys to component implementations."""

from __future__ import annotations

import asyncio
import importlib
import logging
from typing import Any, Union

from ..errors import ComponentResolutionError
from .base import Component
from .builtin import BUILTIN_COMPONENTS

logger = logging.getLogger(__name__)

# A registry entry is either a component class/factory or a "module:attribute" path
ComponentEntry = Union[type, str, Any]


class ComponentLoader:
    """Resolves components by name and variant key.

    Registry entries may be component classes (instantiated with the variant
    key) or importable ``"package.module:Attribute"`` paths, which are
    imported off the event loop the first time they are needed:

    ```python
    loader = ComponentLoader({"Banner": "mysite.components.banner:Banner"})
    banner = await loader.resolve("Banner", "promo")
    ```

    Resolved components are cached per ``(name, hook)``, so resolve() is
    safe to call for every node on every compilation pass. Concurrent calls
    for the same key share one load.
    """

    def __init__(
        self,
        registry: dict[str, ComponentEntry] | None = None,
        include_builtins: bool = True,
    ) -> None:
        """Initialize the loader.

        Args:
            registry: Extra component entries by name
            include_builtins: Whether to register View and Image
        """
        self._registry: dict[str, ComponentEntry] = {}
        if include_builtins:
            self._registry.update(BUILTIN_COMPONENTS)
        if registry:
            self._registry.update(registry)

        self._cache: dict[tuple[str, str], Component] = {}
        self._inflight: dict[tuple[str, str], asyncio.Future[Component]] = {}

    def register(self, name: str, entry: ComponentEntry) -> None:
        """Register (or replace) a component entry and drop its cached variants."""
        self._registry[name] = entry
        for key in [key for key in self._cache if key[0] == name]:
            del self._cache[key]

    def known_names(self) -> list[str]:
        """List registered component names."""
        return sorted(self._registry)

    async def resolve(self, name: str, hook: str = "") -> Component:
        """Resolve a component by name and variant key.

        Args:
            name: Component identifier from the layout node
            hook: Variant key from the layout node

        Returns:
            Component instance

        Raises:
            ComponentResolutionError: If the name is unknown or loading fails
        """
        key = (name, hook)
        if key in self._cache:
            return self._cache[key]

        if name not in self._registry:
            raise ComponentResolutionError(name, hook, "unknown component")

        future = self._inflight.get(key)
        if future is None:
            future = asyncio.ensure_future(self._load(name, hook))
            self._inflight[key] = future
            future.add_done_callback(lambda f, key=key: self._finish(key, f))

        # Shielded: cancelling one waiting pass leaves the shared load running
        return await asyncio.shield(future)

    def _finish(self, key: tuple[str, str], future: asyncio.Future[Component]) -> None:
        """Drop a finished load from the in-flight table."""
        self._inflight.pop(key, None)
        if not future.cancelled() and future.exception() is not None:
            logger.debug("Load of %s failed: %s", key, future.exception())

    async def _load(self, name: str, hook: str) -> Component:
        """Load, instantiate and cache one component variant."""
        entry = self._registry[name]
        if isinstance(entry, str):
            entry = await asyncio.to_thread(self._import_entry, name, hook, entry)

        if isinstance(entry, type):
            try:
                component = entry(hook)
            except Exception as exc:
                raise ComponentResolutionError(name, hook, f"cannot instantiate: {exc}") from exc
        else:
            component = entry

        if not isinstance(component, Component):
            raise ComponentResolutionError(name, hook, f"{component!r} has no render() method")

        logger.debug("Resolved component %s (hook %r) to %r", name, hook, component)
        self._cache[(name, hook)] = component
        return component

    @staticmethod
    def _import_entry(name: str, hook: str, path: str) -> Any:
        """Import a ``module:attribute`` path."""
        module_name, sep, attr = path.partition(":")
        if not sep or not module_name or not attr:
            raise ComponentResolutionError(name, hook, f"bad import path '{path}'")
        try:
            module = importlib.import_module(module_name)
            return getattr(module, attr)
        except Exception as exc:
            raise ComponentResolutionError(name, hook, f"cannot import '{path}': {exc}") from exc

    def clear_cache(self) -> None:
        """Clear the resolved component cache."""
        self._cache.clear()
