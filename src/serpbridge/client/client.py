"""serpbridge client — One interface over every registered search provider.

Usage::

    # Async
    async with AsyncSearchClient.from_settings() as client:
        raw = await client.search(SearchParams(query="golang"))
        result = await client.search_normalized(SearchParams(query="golang"))

    # Sync (wraps the async client internally)
    client = SearchClient(engine="serpapi")
    result = client.search_news_normalized(SearchParams(query="golang"))
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, TypeVar

from serpbridge.adapters import BUILTIN_ADAPTERS
from serpbridge.adapters.base.adapter import EngineInfo, SearchAdapter
from serpbridge.adapters.base.exceptions import OperationNotSupportedError
from serpbridge.adapters.base.registry import AdapterRegistry, select_default_adapter
from serpbridge.config.settings import Settings
from serpbridge.core.normalizer import Normalizer
from serpbridge.models.normalized import NormalizedResult
from serpbridge.models.query import Operation, RawResult, ScrapeParams, SearchCategory, SearchParams

_T = TypeVar("_T")

logger = logging.getLogger(__name__)


def build_registry(settings: Settings) -> AdapterRegistry:
    """Register every enabled built-in adapter that has an API key.

    Args:
        settings: Application settings.

    Returns:
        A registry of (not yet initialized) adapters.
    """
    registry = AdapterRegistry()
    for name, adapter_class in BUILTIN_ADAPTERS.items():
        config = settings.adapter_config(name)
        if not config.enabled:
            logger.info("Adapter %s disabled by configuration", name)
            continue

        api_key = settings.api_key_for(name)
        if not api_key:
            logger.info("Skipping adapter %s: no API key configured", name)
            continue

        kwargs: dict[str, Any] = {**config.extra, "api_key": api_key, "timeout": settings.search.timeout}
        if config.base_url:
            kwargs["base_url"] = config.base_url
        registry.register(adapter_class(**kwargs))
    return registry


# ═══════════════════════════════════════════════════════════════════════════════
# Async client
# ═══════════════════════════════════════════════════════════════════════════════


class AsyncSearchClient:
    """Facade over one active adapter from a registry.

    Every operation is checked against the active adapter's supported
    operations before it is forwarded.

    Args:
        registry: Adapters to choose from.
        engine: Name of the adapter to use. Must be registered.
        default_engine: Preferred adapter when *engine* is not given; falls
            back to ``serper`` and then to the first registered adapter.

    Raises:
        AdapterNotFoundError: If *engine* is not registered, or the registry
            is empty.
    """

    def __init__(
        self,
        registry: AdapterRegistry,
        engine: str | None = None,
        *,
        default_engine: str | None = None,
    ) -> None:
        self._registry = registry
        if engine:
            self._adapter = registry.get(engine)
        else:
            self._adapter = select_default_adapter(registry, default_engine)
        logger.info("Using search engine: %s v%s", self._adapter.name, self._adapter.version)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, engine: str | None = None) -> AsyncSearchClient:
        """Build a client with every adapter that *settings* has credentials for."""
        settings = settings or Settings()
        return cls(build_registry(settings), engine, default_engine=settings.preferred_engine())

    async def __aenter__(self) -> AsyncSearchClient:
        await self.initialize()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def initialize(self) -> None:
        """Initialize every registered adapter."""
        await self._registry.initialize_all()

    async def close(self) -> None:
        """Shut down every registered adapter."""
        await self._registry.shutdown_all()

    # ── Engine selection ──

    @property
    def registry(self) -> AdapterRegistry:
        return self._registry

    @property
    def adapter(self) -> SearchAdapter:
        """The active adapter."""
        return self._adapter

    @property
    def name(self) -> str:
        return self._adapter.name

    @property
    def engine(self) -> str:
        """Name of the active adapter."""
        return self._adapter.name

    @property
    def version(self) -> str:
        return self._adapter.version

    @property
    def supported_tools(self) -> list[str]:
        return self._adapter.supported_tools

    @property
    def engines(self) -> list[str]:
        """Names of all registered adapters."""
        return self._registry.names

    def engine_info(self) -> dict[str, EngineInfo]:
        return self._registry.engine_info()

    def use_engine(self, name: str) -> None:
        """Make adapter *name* the active one.

        Raises:
            AdapterNotFoundError: If *name* is not registered.
        """
        self._adapter = self._registry.get(name)
        logger.info("Switched search engine to %s", name)

    def supports(self, operation: Operation | str) -> bool:
        """Whether the active adapter supports *operation*."""
        return self._adapter.supports(operation)

    def _check_support(self, operation: Operation) -> None:
        if not self.supports(operation):
            raise OperationNotSupportedError(
                f"operation not supported by current engine: '{operation.value}' "
                f"(engine: {self.name}, supported: {self.supported_tools})"
            )

    async def _dispatch(self, operation: Operation, params: SearchParams | ScrapeParams) -> RawResult:
        self._check_support(operation)
        return await self._adapter.execute(operation, params)

    # ── Raw operations ──

    async def search(self, params: SearchParams) -> RawResult:
        """General web search."""
        return await self._dispatch(Operation.SEARCH, params)

    async def search_news(self, params: SearchParams) -> RawResult:
        return await self._dispatch(Operation.SEARCH_NEWS, params)

    async def search_images(self, params: SearchParams) -> RawResult:
        return await self._dispatch(Operation.SEARCH_IMAGES, params)

    async def search_videos(self, params: SearchParams) -> RawResult:
        return await self._dispatch(Operation.SEARCH_VIDEOS, params)

    async def search_places(self, params: SearchParams) -> RawResult:
        return await self._dispatch(Operation.SEARCH_PLACES, params)

    async def search_maps(self, params: SearchParams) -> RawResult:
        return await self._dispatch(Operation.SEARCH_MAPS, params)

    async def search_reviews(self, params: SearchParams) -> RawResult:
        return await self._dispatch(Operation.SEARCH_REVIEWS, params)

    async def search_shopping(self, params: SearchParams) -> RawResult:
        return await self._dispatch(Operation.SEARCH_SHOPPING, params)

    async def search_scholar(self, params: SearchParams) -> RawResult:
        return await self._dispatch(Operation.SEARCH_SCHOLAR, params)

    async def search_lens(self, params: SearchParams) -> RawResult:
        """Visual search. Raises OperationNotSupportedError on engines without it."""
        return await self._dispatch(Operation.SEARCH_LENS, params)

    async def search_autocomplete(self, params: SearchParams) -> RawResult:
        return await self._dispatch(Operation.SEARCH_AUTOCOMPLETE, params)

    async def scrape_webpage(self, params: ScrapeParams) -> RawResult:
        return await self._dispatch(Operation.SCRAPE_WEBPAGE, params)

    # ── Normalized operations ──

    async def search_normalized(self, params: SearchParams) -> NormalizedResult:
        """Web search, normalized to the provider-independent schema."""
        raw = await self.search(params)
        return Normalizer(self.name).normalize(SearchCategory.WEB, raw, params.query)

    async def search_news_normalized(self, params: SearchParams) -> NormalizedResult:
        raw = await self.search_news(params)
        return Normalizer(self.name).normalize(SearchCategory.NEWS, raw, params.query)

    async def search_images_normalized(self, params: SearchParams) -> NormalizedResult:
        raw = await self.search_images(params)
        return Normalizer(self.name).normalize(SearchCategory.IMAGES, raw, params.query)


# ═══════════════════════════════════════════════════════════════════════════════
# Sync client (wraps AsyncSearchClient)
# ═══════════════════════════════════════════════════════════════════════════════


class SearchClient:
    """Synchronous search client.

    Wraps :class:`AsyncSearchClient` using ``asyncio.run``; each call gets
    its own async client so no connection outlives its event loop.

    Args:
        settings: Application settings. Loaded from the environment if None.
        engine: Adapter to use. Defaults to the configured preference.

    Example::

        client = SearchClient(engine="serper")
        result = client.search_normalized(SearchParams(query="golang"))
        print(result.to_json())
    """

    def __init__(self, settings: Settings | None = None, engine: str | None = None) -> None:
        self._settings = settings or Settings()
        self._engine: str | None = None
        # Resolving the engine up front surfaces configuration errors here.
        self._engine = self._make_client(engine).name

    def _make_client(self, engine: str | None = None) -> AsyncSearchClient:
        return AsyncSearchClient.from_settings(self._settings, engine or self._engine)

    def _run(self, coro: Coroutine[Any, Any, _T]) -> _T:
        """Run an async coroutine synchronously."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop and loop.is_running():
            # Already inside an event loop (e.g. Jupyter), so run in a worker thread
            import concurrent.futures

            with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
                return pool.submit(asyncio.run, coro).result()
        return asyncio.run(coro)

    def _call(self, fn: Callable[[AsyncSearchClient], Awaitable[_T]]) -> _T:
        async def _inner() -> _T:
            async with self._make_client() as c:
                return await fn(c)

        return self._run(_inner())

    @property
    def name(self) -> str:
        return self._engine or ""

    engine = name

    @property
    def engines(self) -> list[str]:
        return self._make_client().engines

    def engine_info(self) -> dict[str, EngineInfo]:
        return self._make_client().engine_info()

    def use_engine(self, name: str) -> None:
        """Make adapter *name* the active one."""
        self._engine = self._make_client(name).name

    def supports(self, operation: Operation | str) -> bool:
        return self._make_client().supports(operation)

    def search(self, params: SearchParams) -> RawResult:
        return self._call(lambda c: c.search(params))

    def search_news(self, params: SearchParams) -> RawResult:
        return self._call(lambda c: c.search_news(params))

    def search_images(self, params: SearchParams) -> RawResult:
        return self._call(lambda c: c.search_images(params))

    def search_videos(self, params: SearchParams) -> RawResult:
        return self._call(lambda c: c.search_videos(params))

    def search_places(self, params: SearchParams) -> RawResult:
        return self._call(lambda c: c.search_places(params))

    def search_maps(self, params: SearchParams) -> RawResult:
        return self._call(lambda c: c.search_maps(params))

    def search_reviews(self, params: SearchParams) -> RawResult:
        return self._call(lambda c: c.search_reviews(params))

    def search_shopping(self, params: SearchParams) -> RawResult:
        return self._call(lambda c: c.search_shopping(params))

    def search_scholar(self, params: SearchParams) -> RawResult:
        return self._call(lambda c: c.search_scholar(params))

    def search_lens(self, params: SearchParams) -> RawResult:
        return self._call(lambda c: c.search_lens(params))

    def search_autocomplete(self, params: SearchParams) -> RawResult:
        return self._call(lambda c: c.search_autocomplete(params))

    def scrape_webpage(self, params: ScrapeParams) -> RawResult:
        return self._call(lambda c: c.scrape_webpage(params))

    def search_normalized(self, params: SearchParams) -> NormalizedResult:
        return self._call(lambda c: c.search_normalized(params))

    def search_news_normalized(self, params: SearchParams) -> NormalizedResult:
        return self._call(lambda c: c.search_news_normalized(params))

    def search_images_normalized(self, params: SearchParams) -> NormalizedResult:
        return self._call(lambda c: c.search_images_normalized(params))
