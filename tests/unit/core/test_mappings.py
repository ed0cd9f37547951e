"""Tests for the provider field-mapping tables."""

from __future__ import annotations

from dataclasses import fields

import pytest

from serpbridge.core.exceptions import UnsupportedProviderError
from serpbridge.core.mappings import PROVIDER_MAPPINGS, Provider
from serpbridge.models.normalized import (
    AnswerBox,
    ImageResult,
    KnowledgeGraph,
    NewsResult,
    OrganicResult,
    PeopleAlsoAsk,
    RelatedSearch,
    SearchMetadata,
)

_TARGETS = {
    "organic": OrganicResult,
    "answer_box": AnswerBox,
    "knowledge_graph": KnowledgeGraph,
    "related_searches": RelatedSearch,
    "people_also_ask": PeopleAlsoAsk,
    "news": NewsResult,
    "images": ImageResult,
    "search_parameters": SearchMetadata,
}


class TestProvider:
    def test_every_provider_is_mapped(self) -> None:
        assert set(PROVIDER_MAPPINGS) == set(Provider)

    @pytest.mark.parametrize(("name", "expected"), [("serper", Provider.SERPER), ("SerpAPI", Provider.SERPAPI)])
    def test_parse(self, name: str, expected: Provider) -> None:
        assert Provider.parse(name) is expected

    def test_parse_passes_members_through(self) -> None:
        assert Provider.parse(Provider.SERPAPI) is Provider.SERPAPI

    @pytest.mark.parametrize("name", ["", "bing", "serp api"])
    def test_parse_unknown(self, name: str) -> None:
        with pytest.raises(UnsupportedProviderError, match="Supported providers"):
            Provider.parse(name)


class TestMappingTables:
    @pytest.mark.parametrize("provider", list(Provider))
    def test_canonical_names_exist_on_models(self, provider: Provider) -> None:
        mapping = PROVIDER_MAPPINGS[provider]
        for f in fields(mapping):
            collection = getattr(mapping, f.name)
            model = _TARGETS[f.name]
            unknown = set(collection.fields) - set(model.model_fields)
            assert not unknown, f"{provider.value}.{f.name} maps unknown fields {unknown}"

    @pytest.mark.parametrize("provider", list(Provider))
    def test_position_is_never_mapped(self, provider: Provider) -> None:
        mapping = PROVIDER_MAPPINGS[provider]
        for f in fields(mapping):
            assert "position" not in getattr(mapping, f.name).fields

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            PROVIDER_MAPPINGS[Provider.SERPER] = PROVIDER_MAPPINGS[Provider.SERPAPI]  # type: ignore[index]

    def test_collection_keys_follow_provider_casing(self) -> None:
        assert PROVIDER_MAPPINGS[Provider.SERPER].answer_box.key == "answerBox"
        assert PROVIDER_MAPPINGS[Provider.SERPAPI].answer_box.key == "answer_box"
        assert PROVIDER_MAPPINGS[Provider.SERPAPI].people_also_ask.key == "related_questions"
