"""SerpAPI adapter — Google results via SerpAPI.

All search operations are a ``GET`` on one endpoint; the operation is chosen
by the ``engine`` query parameter and the API key travels as ``api_key``::

    GET https://serpapi.com/search.json?engine=google_news&q=golang&api_key=...

Responses use snake_case keys (``organic_results``, ``answer_box``,
``search_parameters``). SerpAPI has no visual (lens) search and no scraping
endpoint; scraping fetches the page directly.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from serpbridge.adapters.base.adapter import SearchAdapter
from serpbridge.adapters.base.exceptions import ConfigurationError, ConnectionError, QueryError
from serpbridge.models.query import Operation, RawResult, ScrapeParams, SearchParams

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://serpapi.com"
SEARCH_PATH = "/search.json"

_SCRAPE_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

_ENGINES: dict[Operation, str] = {
    Operation.SEARCH: "google",
    Operation.SEARCH_NEWS: "google_news",
    Operation.SEARCH_IMAGES: "google_images",
    Operation.SEARCH_VIDEOS: "google_videos",
    Operation.SEARCH_PLACES: "google_maps",
    Operation.SEARCH_MAPS: "google_maps",
    Operation.SEARCH_REVIEWS: "google",
    Operation.SEARCH_SHOPPING: "google_shopping",
    Operation.SEARCH_SCHOLAR: "google_scholar",
    Operation.SEARCH_AUTOCOMPLETE: "google_autocomplete",
}

_DROPPED_PARAMS: dict[Operation, frozenset[str]] = {
    Operation.SEARCH_SCHOLAR: frozenset({"location", "gl"}),
    Operation.SEARCH_AUTOCOMPLETE: frozenset({"location", "num"}),
}


class SerpApiAdapter(SearchAdapter):
    """Search adapter for SerpAPI (GET, query-string authentication).

    Args:
        api_key: SerpAPI key.
        base_url: API base URL.
        timeout: HTTP request timeout in seconds.
        **kwargs: Extra keyword arguments (ignored, for config compat).
    """

    supported_operations = frozenset(Operation) - {Operation.SEARCH_LENS}

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
        return "serpapi"

    async def initialize(self) -> None:
        """Initialize the HTTP client."""
        if not self._api_key:
            raise ConfigurationError(
                "SerpAPI key is required. Set SERPAPI_API_KEY or search.adapters.serpapi.api_key"
            )

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Accept": "application/json"},
            timeout=httpx.Timeout(self._timeout),
        )
        logger.info("SerpAPI adapter initialized (%s)", self._base_url)

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def execute(self, operation: Operation, params: SearchParams | ScrapeParams) -> RawResult:
        self._check_supported(operation)
        if isinstance(params, ScrapeParams):
            return await self._scrape(params)

        query = {**self.build_params(operation, params), "api_key": self._api_key}
        return await self._send(self._client, "GET", SEARCH_PATH, params=query)

    @staticmethod
    def build_params(operation: Operation, params: SearchParams) -> dict[str, str]:
        """Translate *params* into SerpAPI query parameters (without the key)."""
        query: dict[str, str] = {"q": params.query, "engine": _ENGINES[operation]}
        if params.location:
            query["location"] = params.location
        if params.language:
            query["hl"] = params.language
        if params.country:
            query["gl"] = params.country
        if params.num_results:
            query["num"] = str(params.num_results)

        if operation is Operation.SEARCH_PLACES:
            query["type"] = "search"
        elif operation is Operation.SEARCH_REVIEWS:
            query["q"] = f"{params.query} reviews"

        for key in _DROPPED_PARAMS.get(operation, ()):
            query.pop(key, None)
        return query

    async def _scrape(self, params: ScrapeParams) -> RawResult:
        """Fetch a page directly and wrap it in a JSON-shaped result."""
        if self._client is None:
            raise ConnectionError("serpapi client not initialized.")

        try:
            response = await self._client.get(
                params.url,
                headers={"User-Agent": _SCRAPE_USER_AGENT},
                follow_redirects=True,
            )
        except httpx.RequestError as e:
            raise ConnectionError(f"Failed to scrape {params.url}: {e}") from e

        if response.status_code != 200:
            raise QueryError(f"Scraping error: status {response.status_code}")

        return RawResult(
            data={
                "url": params.url,
                "content": response.text,
                "status": response.status_code,
                "headers": dict(response.headers),
            },
            raw=response.content,
        )
