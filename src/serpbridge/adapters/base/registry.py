"""Adapter Registry — Holds the search adapters available to a client.

The registry is an explicit object, built once at startup and handed to the
client; there is no process-wide registration.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from serpbridge.adapters.base.adapter import EngineInfo, SearchAdapter

logger = logging.getLogger(__name__)

DEFAULT_ENGINE = "serper"


class AdapterNotFoundError(Exception):
    """Raised when a requested adapter is not registered."""


class AdapterRegistry:
    """Insertion-ordered, name-keyed collection of adapter instances.

    Registration swaps in a new mapping instead of mutating the current
    one, so concurrent readers always see a complete snapshot.

    Example:
        >>> registry = AdapterRegistry()
        >>> registry.register(SerperAdapter(api_key="..."))
        >>> await registry.initialize_all()
        >>> adapter = registry.get("serper")
    """

    def __init__(self) -> None:
        self._adapters: dict[str, SearchAdapter] = {}

    def register(self, adapter: SearchAdapter) -> None:
        """Register an adapter under its ``name``.

        Args:
            adapter: The adapter instance to register.
        """
        name = adapter.name
        if name in self._adapters:
            logger.warning("Overwriting existing adapter registration: %s", name)
        self._adapters = {**self._adapters, name: adapter}
        logger.info("Registered adapter: %s", name)

    def get(self, name: str) -> SearchAdapter:
        """Get an adapter by its exact name.

        Raises:
            AdapterNotFoundError: If no adapter is registered under *name*.
        """
        adapter = self._adapters.get(name)
        if adapter is None:
            raise AdapterNotFoundError(
                f"No adapter registered with name '{name}'. Available adapters: {self.names}"
            )
        return adapter

    def __contains__(self, name: object) -> bool:
        return name in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)

    def __iter__(self) -> Iterator[SearchAdapter]:
        return iter(list(self._adapters.values()))

    @property
    def names(self) -> list[str]:
        """All registered adapter names, in registration order."""
        return list(self._adapters)

    def engine_info(self) -> dict[str, EngineInfo]:
        """Name, version and supported tools of every registered adapter."""
        return {name: adapter.info() for name, adapter in self._adapters.items()}

    async def initialize_all(self) -> None:
        """Initialize every registered adapter.

        If any adapter fails, every adapter is shut down again before the
        error propagates.
        """
        for name, adapter in self._adapters.items():
            try:
                await adapter.initialize()
            except Exception:
                logger.error("Failed to initialize adapter: %s", name)
                await self.shutdown_all()
                raise
            logger.info("Initialized adapter: %s", name)

    async def shutdown_all(self) -> None:
        """Shut down every registered adapter, logging (not raising) failures."""
        for name, adapter in self._adapters.items():
            try:
                await adapter.shutdown()
                logger.info("Shut down adapter: %s", name)
            except Exception:
                logger.warning("Error shutting down adapter: %s", name, exc_info=True)


def select_default_adapter(registry: AdapterRegistry, preferred: str | None = None) -> SearchAdapter:
    """Pick the adapter a client should use when none is named explicitly.

    Tries *preferred*, then ``serper``, then the first registered adapter.

    Raises:
        AdapterNotFoundError: If the registry is empty.
    """
    preferred = preferred or DEFAULT_ENGINE
    if preferred in registry:
        return registry.get(preferred)

    if not len(registry):
        raise AdapterNotFoundError("No search engines available. Please ensure API keys are set.")

    fallback = DEFAULT_ENGINE if DEFAULT_ENGINE in registry else registry.names[0]
    logger.warning(
        "Engine '%s' not found, falling back to '%s'. Available engines: %s",
        preferred,
        fallback,
        registry.names,
    )
    return registry.get(fallback)
