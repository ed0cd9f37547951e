"""serpbridge — One client and one result schema for Serper and SerpAPI."""

from serpbridge.client.client import AsyncSearchClient, SearchClient
from serpbridge.core.normalizer import Normalizer, normalize
from serpbridge.models.normalized import NormalizedResult
from serpbridge.models.query import Operation, RawResult, ScrapeParams, SearchCategory, SearchParams

__version__ = "0.1.0"

__all__ = [
    "AsyncSearchClient",
    "NormalizedResult",
    "Normalizer",
    "Operation",
    "RawResult",
    "ScrapeParams",
    "SearchCategory",
    "SearchClient",
    "SearchParams",
    "__version__",
    "normalize",
]
