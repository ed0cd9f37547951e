"""SerpAPI adapter (GET, query-string authentication)."""

from serpbridge.adapters.serpapi.adapter import SerpApiAdapter

__all__ = ["SerpApiAdapter"]
