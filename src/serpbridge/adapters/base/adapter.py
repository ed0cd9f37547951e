"""Base search adapter — Abstract interface for all search providers.

Every provider must implement this interface to integrate with serpbridge.
The adapter is responsible for:
  1. Translating ``SearchParams`` into the provider's HTTP request
  2. Authenticating against the provider
  3. Returning the decoded JSON response as a ``RawResult``

Adapters do not normalize; see ``serpbridge.core.normalizer``.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import BaseModel, Field

from serpbridge.adapters.base.exceptions import (
    AuthenticationError,
    ConnectionError,
    OperationNotSupportedError,
    QueryError,
)
from serpbridge.models.query import Operation, RawResult, ScrapeParams, SearchParams

logger = logging.getLogger(__name__)


class EngineInfo(BaseModel):
    """Descriptive information about an adapter."""

    name: str = Field(description="Adapter name, e.g. 'serper'")
    version: str = Field(description="Adapter implementation version")
    supported_tools: list[str] = Field(default_factory=list, description="Supported operation names")


class SearchAdapter(ABC):
    """Abstract base class for search provider adapters.

    All adapters must implement:
      - name: Unique adapter name
      - initialize() / shutdown(): HTTP client lifecycle
      - execute(): Perform one operation and return the raw response

    The per-operation coroutines (``search``, ``search_news``, ...) all
    funnel into :meth:`execute`. Cancelling the awaiting task cancels the
    in-flight request.
    """

    version: str = "1.0.0"
    supported_operations: frozenset[Operation] = frozenset(Operation)

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique adapter name (e.g., 'serper', 'serpapi')."""

    @abstractmethod
    async def initialize(self) -> None:
        """Create the HTTP client.

        Raises:
            ConfigurationError: If required configuration (the API key) is missing.
        """

    @abstractmethod
    async def shutdown(self) -> None:
        """Close the HTTP client and release resources."""

    @abstractmethod
    async def execute(self, operation: Operation, params: SearchParams | ScrapeParams) -> RawResult:
        """Perform *operation* against the provider.

        Args:
            operation: The operation to perform.
            params: ``ScrapeParams`` for ``Operation.SCRAPE_WEBPAGE``,
                ``SearchParams`` otherwise.

        Returns:
            The provider response.

        Raises:
            OperationNotSupportedError: If the provider has no such operation.
            AuthenticationError: If the provider rejects the credentials.
            QueryError: If the provider returns an error.
            ConnectionError: If the provider cannot be reached.
        """

    async def __aenter__(self) -> SearchAdapter:
        await self.initialize()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.shutdown()

    @property
    def supported_tools(self) -> list[str]:
        """Names of the supported operations, in declaration order."""
        return [op.value for op in Operation if op in self.supported_operations]

    def supports(self, operation: Operation | str) -> bool:
        try:
            return Operation(operation) in self.supported_operations
        except ValueError:
            return False

    def info(self) -> EngineInfo:
        return EngineInfo(name=self.name, version=self.version, supported_tools=self.supported_tools)

    # ── Operations ───────────────────────────────────────────────────────

    async def search(self, params: SearchParams) -> RawResult:
        """General web search."""
        return await self.execute(Operation.SEARCH, params)

    async def search_news(self, params: SearchParams) -> RawResult:
        return await self.execute(Operation.SEARCH_NEWS, params)

    async def search_images(self, params: SearchParams) -> RawResult:
        return await self.execute(Operation.SEARCH_IMAGES, params)

    async def search_videos(self, params: SearchParams) -> RawResult:
        return await self.execute(Operation.SEARCH_VIDEOS, params)

    async def search_places(self, params: SearchParams) -> RawResult:
        return await self.execute(Operation.SEARCH_PLACES, params)

    async def search_maps(self, params: SearchParams) -> RawResult:
        return await self.execute(Operation.SEARCH_MAPS, params)

    async def search_reviews(self, params: SearchParams) -> RawResult:
        return await self.execute(Operation.SEARCH_REVIEWS, params)

    async def search_shopping(self, params: SearchParams) -> RawResult:
        return await self.execute(Operation.SEARCH_SHOPPING, params)

    async def search_scholar(self, params: SearchParams) -> RawResult:
        return await self.execute(Operation.SEARCH_SCHOLAR, params)

    async def search_lens(self, params: SearchParams) -> RawResult:
        """Visual search (not every provider supports it)."""
        return await self.execute(Operation.SEARCH_LENS, params)

    async def search_autocomplete(self, params: SearchParams) -> RawResult:
        """Query suggestions."""
        return await self.execute(Operation.SEARCH_AUTOCOMPLETE, params)

    async def scrape_webpage(self, params: ScrapeParams) -> RawResult:
        return await self.execute(Operation.SCRAPE_WEBPAGE, params)

    # ── Helpers for subclasses ───────────────────────────────────────────

    def _check_supported(self, operation: Operation) -> None:
        if operation not in self.supported_operations:
            raise OperationNotSupportedError(f"{operation.value} is not supported by {self.name}")

    async def _send(self, client: httpx.AsyncClient | None, method: str, url: str, **kwargs: Any) -> RawResult:
        """Send one request and decode the JSON body.

        Maps httpx failures onto the adapter exception hierarchy.
        """
        if client is None:
            raise ConnectionError(f"{self.name} client not initialized.")

        try:
            response = await client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            raise ConnectionError(f"{self.name} request failed: {e}") from e

        if response.status_code in (401, 403):
            raise AuthenticationError(f"{self.name} rejected the API key ({response.status_code}).")
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise QueryError(f"{self.name} API error ({e.response.status_code}): {e.response.text[:200]}") from e

        body = response.content
        try:
            data = json.loads(body)
        except ValueError as e:
            raise QueryError(f"{self.name} returned a non-JSON response: {e}") from e

        logger.debug("%s %s -> %d (%d bytes)", method, url, response.status_code, len(body))
        return RawResult(data=data, raw=body)
