"""Serper adapter — Google results via the Serper API.

Every operation is a ``POST`` of a JSON body to its own endpoint, with the
API key in the ``X-API-KEY`` header::

    POST https://google.serper.dev/search
    {"q": "golang", "gl": "us", "hl": "en", "num": 10}

Responses use camelCase keys (``organic``, ``answerBox``, ``searchParameters``).

Usage::

    async with SerperAdapter(api_key="...") as adapter:
        raw = await adapter.search(SearchParams(query="golang"))
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from serpbridge.adapters.base.adapter import SearchAdapter
from serpbridge.adapters.base.exceptions import ConfigurationError
from serpbridge.models.query import Operation, RawResult, ScrapeParams, SearchParams

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://google.serper.dev"

_ENDPOINTS: dict[Operation, str] = {
    Operation.SEARCH: "/search",
    Operation.SEARCH_NEWS: "/news",
    Operation.SEARCH_IMAGES: "/images",
    Operation.SEARCH_VIDEOS: "/videos",
    Operation.SEARCH_PLACES: "/places",
    Operation.SEARCH_MAPS: "/maps",
    Operation.SEARCH_REVIEWS: "/reviews",
    Operation.SEARCH_SHOPPING: "/shopping",
    Operation.SEARCH_SCHOLAR: "/scholar",
    Operation.SEARCH_LENS: "/lens",
    Operation.SEARCH_AUTOCOMPLETE: "/autocomplete",
    Operation.SCRAPE_WEBPAGE: "/scrape",
}

# Body fields each restricted endpoint does not accept.
_DROPPED_FIELDS: dict[Operation, frozenset[str]] = {
    Operation.SEARCH_SCHOLAR: frozenset({"location", "gl"}),
    Operation.SEARCH_LENS: frozenset({"location"}),
    Operation.SEARCH_AUTOCOMPLETE: frozenset({"location", "num"}),
}


class SerperAdapter(SearchAdapter):
    """Search adapter for the Serper API (POST, header authentication).

    Args:
        api_key: Serper API key.
        base_url: API base URL.
        timeout: HTTP request timeout in seconds.
        **kwargs: Extra keyword arguments (ignored, for config compat).
    """

    supported_operations = frozenset(Operation)

    def __init__(
        self,
        api_key: str = "",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        **kwargs: Any,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        return "serper"

    async def initialize(self) -> None:
        """Initialize the HTTP client."""
        if not self._api_key:
            raise ConfigurationError(
                "Serper API key is required. Set SERPER_API_KEY or search.adapters.serper.api_key"
            )

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "X-API-KEY": self._api_key,
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(self._timeout),
        )
        logger.info("Serper adapter initialized (%s)", self._base_url)

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def execute(self, operation: Operation, params: SearchParams | ScrapeParams) -> RawResult:
        self._check_supported(operation)
        if isinstance(params, ScrapeParams):
            body: dict[str, Any] = {"url": params.url}
        else:
            body = self.build_body(operation, params)
        return await self._send(self._client, "POST", _ENDPOINTS[operation], json=body)

    @staticmethod
    def build_body(operation: Operation, params: SearchParams) -> dict[str, Any]:
        """Translate *params* into the Serper request body for *operation*."""
        body: dict[str, Any] = {"q": params.query}
        if params.location:
            body["location"] = params.location
        if params.language:
            body["hl"] = params.language
        if params.country:
            body["gl"] = params.country
        if params.num_results:
            body["num"] = params.num_results

        for key in _DROPPED_FIELDS.get(operation, ()):
            body.pop(key, None)
        return body
