"""Normalizer — Rewrites provider responses into a ``NormalizedResult``.

Providers return loosely typed JSON whose shape varies per request: a
response without an answer box simply has no ``answerBox`` key, and fields
occasionally arrive with unexpected types. The normalizer is deliberately
permissive about all of that:

  - a missing or non-list collection becomes an empty list
  - a collection element that is not an object is skipped
  - a missing or non-object featured block becomes ``None``
  - a field of the wrong type takes its zero value (``""`` or ``0``)

Only two conditions abort a normalization: a response root that is not a
JSON object (:class:`MalformedResponseError`) and a provider without a field
mapping (:class:`UnsupportedProviderError`).

Positions are always assigned here, 1-based in source order. Provider
``position`` / ``rank`` fields are ignored.

Usage::

    normalizer = Normalizer("serper")
    result = normalizer.normalize_search(raw, query="golang")

    # or, in one call
    result = normalize("serpapi", SearchCategory.NEWS, raw, "golang")
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar
from urllib.parse import urlparse

from pydantic import BaseModel

from serpbridge.core.exceptions import MalformedResponseError
from serpbridge.core.mappings import PROVIDER_MAPPINGS, CollectionMapping, Provider
from serpbridge.models.normalized import (
    AnswerBox,
    ImageResult,
    KnowledgeGraph,
    NewsResult,
    NormalizedResult,
    OrganicResult,
    PeopleAlsoAsk,
    RelatedSearch,
    SearchMetadata,
)
from serpbridge.models.query import RawResult, SearchCategory

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)


class Normalizer:
    """Normalize responses from a single provider.

    The provider name is the only state; instances are safe to share
    between threads and tasks.

    Args:
        provider: Provider name (case-insensitive) or :class:`Provider`.
    """

    def __init__(self, provider: str | Provider) -> None:
        if isinstance(provider, Provider):
            self._engine_name = provider.value
        else:
            self._engine_name = str(provider).strip().lower()

    @property
    def engine_name(self) -> str:
        return self._engine_name

    def normalize(
        self,
        category: SearchCategory | str,
        raw: RawResult | None,
        query: str = "",
    ) -> NormalizedResult:
        """Normalize one raw response.

        Args:
            category: Which kind of search produced *raw*.
            raw: The provider response.
            query: Query supplied by the caller. Overridden by the
                provider's own echo of the search parameters, if any.

        Returns:
            A new NormalizedResult referencing *raw*.

        Raises:
            MalformedResponseError: If *raw* or its data is missing, or the
                data is not a JSON object.
            UnsupportedProviderError: If the provider has no field mapping.
        """
        data = _root_object(raw)
        provider = Provider.parse(self._engine_name)
        category = SearchCategory(category)
        mapping = PROVIDER_MAPPINGS[provider]

        fields: dict[str, Any] = {}
        if category is SearchCategory.WEB:
            fields["organic_results"] = _collection(data, mapping.organic, OrganicResult, ranked=True)
            fields["answer_box"] = _block(data, mapping.answer_box, AnswerBox)
            fields["knowledge_graph"] = _block(data, mapping.knowledge_graph, KnowledgeGraph)
            fields["related_searches"] = _collection(data, mapping.related_searches, RelatedSearch)
            fields["people_also_ask"] = _collection(data, mapping.people_also_ask, PeopleAlsoAsk)
        elif category is SearchCategory.NEWS:
            fields["news_results"] = _collection(data, mapping.news, NewsResult, ranked=True)
        else:
            fields["image_results"] = _collection(data, mapping.images, ImageResult, ranked=True)

        metadata = _metadata(data, mapping.search_parameters, self._engine_name, query)
        result = NormalizedResult(search_metadata=metadata, raw=raw, **fields)

        logger.debug(
            "Normalized %s %s response: organic=%d, news=%d, images=%d",
            self._engine_name,
            category.value,
            len(result.organic_results),
            len(result.news_results),
            len(result.image_results),
        )
        return result

    def normalize_search(self, raw: RawResult | None, query: str = "") -> NormalizedResult:
        """Normalize a web search response."""
        return self.normalize(SearchCategory.WEB, raw, query)

    def normalize_news(self, raw: RawResult | None, query: str = "") -> NormalizedResult:
        """Normalize a news search response."""
        return self.normalize(SearchCategory.NEWS, raw, query)

    def normalize_images(self, raw: RawResult | None, query: str = "") -> NormalizedResult:
        """Normalize an image search response."""
        return self.normalize(SearchCategory.IMAGES, raw, query)


def normalize(
    provider: str | Provider,
    category: SearchCategory | str,
    raw: RawResult | None,
    query: str = "",
) -> NormalizedResult:
    """Normalize *raw* from *provider* in one call. See :meth:`Normalizer.normalize`."""
    return Normalizer(provider).normalize(category, raw, query)


# ── Extraction helpers ───────────────────────────────────────────────────────


def _root_object(raw: RawResult | None) -> dict[str, Any]:
    if raw is None or raw.data is None:
        raise MalformedResponseError("Response is empty.")
    if not isinstance(raw.data, dict):
        raise MalformedResponseError(f"Expected a JSON object at the response root, got {type(raw.data).__name__}.")
    return raw.data


def _collection(
    data: dict[str, Any],
    mapping: CollectionMapping,
    model: type[_M],
    *,
    ranked: bool = False,
) -> list[_M]:
    items = data.get(mapping.key)
    if not isinstance(items, list):
        return []

    results: list[_M] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        values = _extract(item, mapping, model)
        if ranked:
            values["position"] = len(results) + 1
        if model is OrganicResult:
            values["domain"] = _extract_domain(values.get("link", ""))
        results.append(model(**values))
    return results


def _block(data: dict[str, Any], mapping: CollectionMapping, model: type[_M]) -> _M | None:
    block = data.get(mapping.key)
    if not isinstance(block, dict):
        return None
    return model(**_extract(block, mapping, model))


def _metadata(
    data: dict[str, Any],
    mapping: CollectionMapping,
    engine: str,
    query: str,
) -> SearchMetadata:
    values: dict[str, Any] = {"engine": engine, "query": query or ""}
    echo = data.get(mapping.key)
    if isinstance(echo, dict):
        # The provider's echo is what was actually searched.
        for name, value in _extract(echo, mapping, SearchMetadata).items():
            if value:
                values[name] = value
    return SearchMetadata(**values)


def _extract(source: dict[str, Any], mapping: CollectionMapping, model: type[BaseModel]) -> dict[str, Any]:
    """Pick the mapped fields out of *source*, typed per *model*."""
    values: dict[str, Any] = {}
    for name, key in mapping.fields.items():
        if model.model_fields[name].annotation is int:
            values[name] = _get_int(source, key)
        else:
            values[name] = _get_str(source, key)
    return values


def _get_str(m: dict[str, Any], key: str) -> str:
    value = m.get(key)
    return value if isinstance(value, str) else ""


def _get_int(m: dict[str, Any], key: str) -> int:
    value = m.get(key)
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _extract_domain(url: str) -> str:
    """Return the hostname from *url*, stripping any leading ``www.``."""
    try:
        host = urlparse(url).hostname or ""
    except ValueError:
        return ""
    return host.removeprefix("www.")
