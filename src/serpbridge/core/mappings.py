"""Provider field-mapping tables.

Each supported provider has one :class:`ProviderMapping` that names, for
every normalized collection, the key the provider stores it under and, for
every canonical field, the key of the source field. Canonical fields a
provider never sends are simply left out of its table and keep their zero
value.

Adding a provider means adding a :class:`Provider` member and one entry in
``PROVIDER_MAPPINGS``; the normalized schema does not change.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from serpbridge.core.exceptions import UnsupportedProviderError


class Provider(str, Enum):
    """Search providers with a field mapping."""

    SERPER = "serper"
    SERPAPI = "serpapi"

    @classmethod
    def parse(cls, name: str | Provider) -> Provider:
        """Resolve a provider from its (case-insensitive) name.

        Raises:
            UnsupportedProviderError: If *name* is not a known provider.
        """
        if isinstance(name, Provider):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise UnsupportedProviderError(
                f"Unsupported provider '{name}'. Supported providers: {[p.value for p in cls]}"
            ) from None


@dataclass(frozen=True)
class CollectionMapping:
    """Where a collection lives in a response, and how its fields are named.

    Attributes:
        key: Top-level key of the collection (or featured block).
        fields: Canonical field name -> source field name.
    """

    key: str
    fields: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ProviderMapping:
    """Complete field mapping for one provider."""

    organic: CollectionMapping
    answer_box: CollectionMapping
    knowledge_graph: CollectionMapping
    related_searches: CollectionMapping
    people_also_ask: CollectionMapping
    news: CollectionMapping
    images: CollectionMapping
    search_parameters: CollectionMapping


_ORGANIC_FIELDS = {"title": "title", "link": "link", "snippet": "snippet", "date": "date"}
_NEWS_FIELDS = {"title": "title", "link": "link", "source": "source", "date": "date", "snippet": "snippet"}
_ECHO_FIELDS = {"query": "q", "location": "location", "language": "hl", "country": "gl"}

SERPER_MAPPING = ProviderMapping(
    organic=CollectionMapping("organic", _ORGANIC_FIELDS),
    answer_box=CollectionMapping(
        "answerBox",
        {
            "type": "type",
            "title": "title",
            "answer": "answer",
            "snippet": "snippet",
            "source": "source",
            "link": "link",
        },
    ),
    knowledge_graph=CollectionMapping(
        "knowledgeGraph",
        {"title": "title", "type": "type", "description": "description", "image_url": "imageUrl"},
    ),
    related_searches=CollectionMapping("relatedSearches", {"query": "query"}),
    people_also_ask=CollectionMapping(
        "peopleAlsoAsk",
        {"question": "question", "answer": "answer", "title": "title", "link": "link"},
    ),
    news=CollectionMapping("news", {**_NEWS_FIELDS, "image_url": "imageUrl", "thumbnail": "imageUrl"}),
    images=CollectionMapping(
        "images",
        {
            "title": "title",
            "image_url": "imageUrl",
            "thumbnail": "imageUrl",
            "source": "source",
            "source_url": "link",
            "width": "imageWidth",
            "height": "imageHeight",
        },
    ),
    search_parameters=CollectionMapping("searchParameters", _ECHO_FIELDS),
)

SERPAPI_MAPPING = ProviderMapping(
    organic=CollectionMapping("organic_results", _ORGANIC_FIELDS),
    answer_box=CollectionMapping(
        "answer_box",
        {"type": "type", "title": "title", "answer": "answer", "snippet": "snippet", "link": "link"},
    ),
    knowledge_graph=CollectionMapping(
        "knowledge_graph",
        {"title": "title", "type": "type", "description": "description", "image_url": "image"},
    ),
    related_searches=CollectionMapping("related_searches", {"query": "query", "link": "link"}),
    # SerpAPI calls "people also ask" related questions and attributes them via displayed_link.
    people_also_ask=CollectionMapping(
        "related_questions",
        {
            "question": "question",
            "answer": "answer",
            "title": "title",
            "link": "link",
            "source": "displayed_link",
        },
    ),
    news=CollectionMapping("news_results", {**_NEWS_FIELDS, "thumbnail": "thumbnail"}),
    images=CollectionMapping(
        "images_results",
        {
            "title": "title",
            "image_url": "original",
            "thumbnail": "thumbnail",
            "source": "source",
            "source_url": "link",
            "width": "original_width",
            "height": "original_height",
        },
    ),
    search_parameters=CollectionMapping("search_parameters", _ECHO_FIELDS),
)

PROVIDER_MAPPINGS: Mapping[Provider, ProviderMapping] = MappingProxyType(
    {
        Provider.SERPER: SERPER_MAPPING,
        Provider.SERPAPI: SERPAPI_MAPPING,
    }
)

_unmapped = set(Provider) - set(PROVIDER_MAPPINGS)
if _unmapped:
    raise RuntimeError(f"Providers without a field mapping: {sorted(p.value for p in _unmapped)}")
del _unmapped
