"""Query models — Provider-independent search requests and raw responses."""

from __future__ import annotations

from enum import Enum
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SearchCategory(str, Enum):
    """Result category a raw response belongs to.

    The normalizer uses it to decide which collections to extract.
    """

    WEB = "web"
    NEWS = "news"
    IMAGES = "images"


class Operation(str, Enum):
    """Named operations an adapter may support.

    Values double as the tool names reported by ``supported_tools``.
    """

    SEARCH = "google_search"
    SEARCH_NEWS = "google_search_news"
    SEARCH_IMAGES = "google_search_images"
    SEARCH_VIDEOS = "google_search_videos"
    SEARCH_PLACES = "google_search_places"
    SEARCH_MAPS = "google_search_maps"
    SEARCH_REVIEWS = "google_search_reviews"
    SEARCH_SHOPPING = "google_search_shopping"
    SEARCH_SCHOLAR = "google_search_scholar"
    SEARCH_LENS = "google_search_lens"
    SEARCH_AUTOCOMPLETE = "google_search_autocomplete"
    SCRAPE_WEBPAGE = "webpage_scrape"


class SearchParams(BaseModel):
    """Search parameters shared by every provider."""

    query: str = Field(description="Search query", min_length=1)
    location: str | None = Field(default=None, description="Search location, e.g. 'Austin, Texas'")
    language: str | None = Field(default=None, description="Interface language code, e.g. 'en'")
    country: str | None = Field(default=None, description="Country code, e.g. 'us'")
    num_results: int | None = Field(default=None, ge=1, le=100, description="Number of results (1-100)")


class ScrapeParams(BaseModel):
    """Parameters for scraping a single web page."""

    url: str = Field(description="Absolute http(s) URL to scrape")

    @field_validator("url")
    @classmethod
    def _check_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"invalid URL: {v!r}")
        return v


class RawResult(BaseModel):
    """A provider response before normalization.

    ``data`` is the decoded JSON document exactly as the provider sent it;
    ``raw`` holds the undecoded response body for diagnostics.
    """

    model_config = ConfigDict(frozen=True)

    data: Any = Field(default=None, description="Decoded JSON document")
    raw: bytes = Field(default=b"", description="Response body as received")
