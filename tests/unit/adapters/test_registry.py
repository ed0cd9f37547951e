"""Tests for the adapter registry and default-engine selection."""

from __future__ import annotations

import pytest

from serpbridge.adapters.base.exceptions import ConfigurationError
from serpbridge.adapters.base.registry import AdapterNotFoundError, AdapterRegistry, select_default_adapter
from serpbridge.adapters.serpapi.adapter import SerpApiAdapter
from serpbridge.adapters.serper.adapter import SerperAdapter
from serpbridge.client.client import AsyncSearchClient


@pytest.fixture
def registry() -> AdapterRegistry:
    registry = AdapterRegistry()
    registry.register(SerpApiAdapter(api_key="a"))
    registry.register(SerperAdapter(api_key="b"))
    return registry


class TestAdapterRegistry:
    def test_register_and_get(self, registry: AdapterRegistry) -> None:
        assert registry.get("serper").name == "serper"
        assert "serpapi" in registry
        assert len(registry) == 2

    def test_names_in_registration_order(self, registry: AdapterRegistry) -> None:
        assert registry.names == ["serpapi", "serper"]
        assert [a.name for a in registry] == ["serpapi", "serper"]

    def test_get_unknown(self, registry: AdapterRegistry) -> None:
        with pytest.raises(AdapterNotFoundError, match="Available adapters"):
            registry.get("bing")

    def test_register_overwrites(self, registry: AdapterRegistry) -> None:
        replacement = SerperAdapter(api_key="c")
        registry.register(replacement)
        assert registry.get("serper") is replacement
        assert len(registry) == 2

    def test_engine_info(self, registry: AdapterRegistry) -> None:
        info = registry.engine_info()
        assert set(info) == {"serpapi", "serper"}
        assert "google_search_lens" in info["serper"].supported_tools
        assert "google_search_lens" not in info["serpapi"].supported_tools

    async def test_initialize_and_shutdown_all(self, registry: AdapterRegistry) -> None:
        await registry.initialize_all()
        assert all(a._client is not None for a in registry)  # type: ignore[attr-defined]
        await registry.shutdown_all()
        assert all(a._client is None for a in registry)  # type: ignore[attr-defined]

    async def test_failed_initialize_closes_started_adapters(self) -> None:
        serper = SerperAdapter(api_key="k")
        registry = AdapterRegistry()
        registry.register(serper)
        registry.register(SerpApiAdapter(api_key=""))

        with pytest.raises(ConfigurationError):
            await registry.initialize_all()
        assert serper._client is None

    async def test_client_context_closes_adapters_on_failed_init(self) -> None:
        serper = SerperAdapter(api_key="k")
        registry = AdapterRegistry()
        registry.register(serper)
        registry.register(SerpApiAdapter(api_key=""))

        with pytest.raises(ConfigurationError):
            async with AsyncSearchClient(registry, "serper"):
                pass
        assert serper._client is None


class TestSelectDefaultAdapter:
    def test_preferred(self, registry: AdapterRegistry) -> None:
        assert select_default_adapter(registry, "serpapi").name == "serpapi"

    def test_serper_when_no_preference(self, registry: AdapterRegistry) -> None:
        assert select_default_adapter(registry).name == "serper"

    def test_unknown_preference_falls_back_to_serper(self, registry: AdapterRegistry) -> None:
        assert select_default_adapter(registry, "bing").name == "serper"

    def test_falls_back_to_first_registered(self) -> None:
        registry = AdapterRegistry()
        registry.register(SerpApiAdapter(api_key="a"))
        assert select_default_adapter(registry, "bing").name == "serpapi"
        assert select_default_adapter(registry).name == "serpapi"

    def test_empty_registry(self) -> None:
        with pytest.raises(AdapterNotFoundError, match="No search engines available"):
            select_default_adapter(AdapterRegistry())
