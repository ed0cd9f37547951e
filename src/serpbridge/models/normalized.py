"""Normalized result models — One schema for every search provider.

The normalizer converts each provider's response into a
:class:`NormalizedResult`. Field names here are stable and independent of
the provider, so the model can be dumped straight to JSON for a CLI or a
tool-call response.

String fields default to ``""`` and number fields to ``0``: a field the
provider did not send is indistinguishable from an empty one.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field

from serpbridge.models.query import RawResult


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class OrganicResult(_Record):
    """A standard, non-featured web search hit."""

    position: int = Field(description="1-based rank in source order")
    title: str = ""
    link: str = ""
    snippet: str = ""
    domain: str = Field(default="", description="Host of the link without a leading 'www.'")
    date: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def url(self) -> str:
        """Alias for :attr:`link`."""
        return self.link


class AnswerBox(_Record):
    """Featured answer shown above the organic results."""

    type: str = ""
    title: str = ""
    answer: str = ""
    snippet: str = ""
    source: str = ""
    link: str = ""


class KnowledgeGraph(_Record):
    """Knowledge panel for an entity."""

    title: str = ""
    type: str = ""
    description: str = ""
    image_url: str = ""


class RelatedSearch(_Record):
    query: str = ""
    link: str = ""


class PeopleAlsoAsk(_Record):
    question: str = ""
    answer: str = ""
    title: str = ""
    link: str = ""
    source: str = ""


class NewsResult(_Record):
    position: int
    title: str = ""
    link: str = ""
    source: str = ""
    date: str = ""
    snippet: str = ""
    image_url: str = ""
    thumbnail: str = ""


class ImageResult(_Record):
    position: int
    title: str = ""
    image_url: str = ""
    thumbnail: str = ""
    source: str = ""
    source_url: str = ""
    width: int = 0
    height: int = 0


class SearchMetadata(_Record):
    """What was searched, and where."""

    engine: str = Field(description="Lower-cased provider name, e.g. 'serper'")
    query: str = ""
    location: str = ""
    language: str = ""
    country: str = ""


class NormalizedResult(_Record):
    """Canonical, provider-agnostic representation of a search response.

    Collections a response does not carry are empty lists, never ``None``.
    Featured blocks (answer box, knowledge graph) are ``None`` when absent.

    Example::

        NormalizedResult(
            organic_results=[
                OrganicResult(position=1, title="...", link="https://...", snippet="..."),
            ],
            answer_box=AnswerBox(title="...", answer="..."),
            search_metadata=SearchMetadata(engine="serper", query="golang"),
        )
    """

    organic_results: list[OrganicResult] = Field(default_factory=list)
    answer_box: AnswerBox | None = None
    knowledge_graph: KnowledgeGraph | None = None
    related_searches: list[RelatedSearch] = Field(default_factory=list)
    people_also_ask: list[PeopleAlsoAsk] = Field(default_factory=list)
    news_results: list[NewsResult] = Field(default_factory=list)
    image_results: list[ImageResult] = Field(default_factory=list)
    search_metadata: SearchMetadata
    raw: RawResult | None = Field(default=None, exclude=True, description="Originating provider response")

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to JSON text (the raw response is never included)."""
        return self.model_dump_json(indent=indent)
