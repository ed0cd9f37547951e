"""Shared test fixtures and configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from serpbridge.config.settings import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the developer's real keys and engine choice out of every test."""
    for var in ("SERPER_API_KEY", "SERPAPI_API_KEY", "SEARCH_ENGINE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)  # no stray .env file


@pytest.fixture
def settings() -> Settings:
    """Settings with keys for both built-in engines."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        search={
            "adapters": {
                "serper": {"api_key": "serper-test-key"},
                "serpapi": {"api_key": "serpapi-test-key"},
            },
        },
    )


# ── Provider payloads ────────────────────────────────────────────────────────
# The two web payloads carry the same logical content, each under its own
# provider's key naming.


@pytest.fixture
def serper_web_payload() -> dict[str, Any]:
    return {
        "searchParameters": {"q": "golang", "gl": "us", "hl": "en", "location": "Austin, Texas", "type": "search"},
        "organic": [
            {
                "title": "The Go Programming Language",
                "link": "https://go.dev/",
                "snippet": "Go is an open source programming language.",
                "position": 1,
            },
            {
                "title": "Go (programming language) - Wikipedia",
                "link": "https://en.wikipedia.org/wiki/Go_(programming_language)",
                "snippet": "Go is a statically typed, compiled language.",
                "date": "Mar 3, 2024",
                "position": 2,
            },
            {
                "title": "A Tour of Go",
                "link": "https://www.go.dev/tour",
                "position": 3,
            },
        ],
        "answerBox": {
            "type": "organic_result",
            "title": "Go",
            "answer": "A programming language designed at Google",
            "snippet": "Go was designed at Google in 2007.",
            "link": "https://go.dev/doc/faq",
        },
        "knowledgeGraph": {
            "title": "Go",
            "type": "Programming language",
            "description": "Go is a statically typed language.",
            "imageUrl": "https://example.com/gopher.png",
        },
        "relatedSearches": [{"query": "golang tutorial"}, {"query": "golang vs rust"}],
        "peopleAlsoAsk": [
            {
                "question": "Is Go easy to learn?",
                "answer": "Yes, Go has a small language surface.",
                "title": "Learning Go",
                "link": "https://example.com/learn-go",
            },
        ],
    }


@pytest.fixture
def serpapi_web_payload() -> dict[str, Any]:
    return {
        "search_metadata": {"id": "abc123", "status": "Success"},
        "search_parameters": {"engine": "google", "q": "golang", "gl": "us", "hl": "en", "location": "Austin, Texas"},
        "organic_results": [
            {
                "position": 1,
                "title": "The Go Programming Language",
                "link": "https://go.dev/",
                "snippet": "Go is an open source programming language.",
            },
            {
                "position": 2,
                "title": "Go (programming language) - Wikipedia",
                "link": "https://en.wikipedia.org/wiki/Go_(programming_language)",
                "snippet": "Go is a statically typed, compiled language.",
                "date": "Mar 3, 2024",
            },
            {
                "position": 3,
                "title": "A Tour of Go",
                "link": "https://www.go.dev/tour",
            },
        ],
        "answer_box": {
            "type": "organic_result",
            "title": "Go",
            "answer": "A programming language designed at Google",
            "snippet": "Go was designed at Google in 2007.",
            "link": "https://go.dev/doc/faq",
        },
        "knowledge_graph": {
            "title": "Go",
            "type": "Programming language",
            "description": "Go is a statically typed language.",
            "image": "https://example.com/gopher.png",
        },
        "related_searches": [{"query": "golang tutorial"}, {"query": "golang vs rust"}],
        "related_questions": [
            {
                "question": "Is Go easy to learn?",
                "answer": "Yes, Go has a small language surface.",
                "title": "Learning Go",
                "link": "https://example.com/learn-go",
            },
        ],
    }


@pytest.fixture
def serper_images_payload() -> dict[str, Any]:
    return {
        "searchParameters": {"q": "gopher", "type": "images"},
        "images": [
            {
                "title": "Gopher mascot",
                "imageUrl": "https://example.com/gopher.png",
                "imageWidth": 640,
                "imageHeight": 480,
                "source": "example.com",
                "link": "https://example.com/gophers",
                "position": 7,
            },
            {
                "title": "Gopher sticker",
                "imageUrl": "https://example.com/sticker.png",
                "source": "shop.example.com",
                "link": "https://shop.example.com/sticker",
            },
        ],
    }


@pytest.fixture
def serpapi_images_payload() -> dict[str, Any]:
    return {
        "search_parameters": {"engine": "google_images", "q": "gopher"},
        "images_results": [
            {
                "position": 7,
                "title": "Gopher mascot",
                "original": "https://example.com/gopher.png",
                "thumbnail": "https://example.com/gopher.png",
                "original_width": 640,
                "original_height": 480,
                "source": "example.com",
                "link": "https://example.com/gophers",
            },
            {
                "title": "Gopher sticker",
                "original": "https://example.com/sticker.png",
                "thumbnail": "https://example.com/sticker.png",
                "source": "shop.example.com",
                "link": "https://shop.example.com/sticker",
            },
        ],
    }
