"""Data models — Search requests, raw provider responses and normalized results."""

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
from serpbridge.models.query import Operation, RawResult, ScrapeParams, SearchCategory, SearchParams

__all__ = [
    "AnswerBox",
    "ImageResult",
    "KnowledgeGraph",
    "NewsResult",
    "NormalizedResult",
    "Operation",
    "OrganicResult",
    "PeopleAlsoAsk",
    "RawResult",
    "RelatedSearch",
    "ScrapeParams",
    "SearchCategory",
    "SearchMetadata",
    "SearchParams",
]
