"""Search adapter layer — Connectors for search providers.

Built-in adapters:
  - serper: Serper API (POST, ``X-API-KEY`` header)
  - serpapi: SerpAPI (GET, ``api_key`` query parameter)

Implement ``SearchAdapter`` to connect another provider.
"""

from __future__ import annotations

from serpbridge.adapters.base.adapter import SearchAdapter
from serpbridge.adapters.serpapi.adapter import SerpApiAdapter
from serpbridge.adapters.serper.adapter import SerperAdapter

BUILTIN_ADAPTERS: dict[str, type[SearchAdapter]] = {
    "serper": SerperAdapter,
    "serpapi": SerpApiAdapter,
}

# Conventional environment variables holding each provider's API key.
API_KEY_ENV_VARS: dict[str, str] = {
    "serper": "SERPER_API_KEY",
    "serpapi": "SERPAPI_API_KEY",
}

__all__ = ["API_KEY_ENV_VARS", "BUILTIN_ADAPTERS", "SearchAdapter", "SerpApiAdapter", "SerperAdapter"]
