"""serpbridge client — Async and sync facades over the search adapters.

Quick start::

    from serpbridge.client import SearchClient
    from serpbridge.models import SearchParams

    client = SearchClient()
    result = client.search_normalized(SearchParams(query="golang"))
"""

from serpbridge.client.client import AsyncSearchClient, SearchClient, build_registry

__all__ = ["AsyncSearchClient", "SearchClient", "build_registry"]
