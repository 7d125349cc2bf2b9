"""
Tests for the Entity Extractor

Covers model-backed extraction, the local fallback and source-specific
query expansion.
"""

import json

import pytest

from agents.extractor import (
    EntityExtractor,
    build_extraction_prompt,
    fallback_entities,
    meaningful_tokens,
    source_queries,
)
from core.llm import DecodingPolicy, LLMClient, MockProvider
from core.schemas import Claim, EntitySet, SourceType
from fixtures.common import make_entities_json


def mock_llm(*responses) -> LLMClient:
    return LLMClient(MockProvider(responses=list(responses)))


class TestModelExtraction:

    def test_plain_json(self):
        extractor = EntityExtractor(mock_llm(make_entities_json()))
        entities = extractor.extract(Claim(text="Will the central bank cut rates?"))

        assert entities.main_subject == "central bank"
        assert entities.search_queries[0] == "central bank rate cut March"
        assert entities.secondary_entities == ["interest rates", "March meeting"]

    def test_fenced_json(self):
        raw = "```json\n" + make_entities_json(main_subject="Bitcoin") + "\n```"
        entities = EntityExtractor(mock_llm(raw)).extract(Claim(text="Bitcoin will reach $100,000"))
        assert entities.main_subject == "Bitcoin"

    def test_lists_are_capped(self):
        raw = json.dumps({
            "mainSubject": "Bitcoin",
            "secondaryEntities": ["a1", "b2", "c3", "d4", "e5", "f6"],
            "keywords": ["k1", "k2", "k3", "k4", "k5", "k6", "k7"],
            "context": "Price target",
            "searchQueries": ["q1", "q2", "q3", "q4", "q5", "q6"],
        })
        entities = EntityExtractor(mock_llm(raw)).extract(Claim(text="Bitcoin will reach $100,000"))
        assert len(entities.secondary_entities) == 4
        assert len(entities.keywords) == 5
        assert len(entities.search_queries) == 5

    def test_prompt_includes_description(self):
        provider = MockProvider(responses=[make_entities_json()])
        EntityExtractor(LLMClient(provider)).extract(
            Claim(text="Will it rain?", description="Measured at Heathrow")
        )
        prompt = provider.calls[0]["messages"][-1]["content"]
        assert "Will it rain?" in prompt
        assert "Measured at Heathrow" in prompt

    def test_requests_json_mode(self):
        provider = MockProvider(responses=[make_entities_json()])
        client = LLMClient(provider, default_policy=DecodingPolicy(temperature=0.2))
        EntityExtractor(client).extract(Claim(text="Will it rain?"))

        policy = provider.calls[0]["policy"]
        assert policy.json_mode is True
        assert policy.temperature == 0.2

    def test_plain_language_model_called_with_prompt_only(self):
        class EchoModel:
            def __init__(self):
                self.prompts = []

            def generate(self, prompt):
                self.prompts.append(prompt)
                return make_entities_json()

        model = EchoModel()
        entities = EntityExtractor(model).extract(Claim(text="Will it rain?"))
        assert entities.main_subject == "central bank"
        assert len(model.prompts) == 1


class TestFallback:
    """Every failure mode ends in local tokenization."""

    CLAIM = Claim(text="Bitcoin will reach $100,000")

    @pytest.mark.parametrize("response", [
        "not json at all",
        "",
        "[1, 2, 3]",
        json.dumps({"mainSubject": "", "searchQueries": ["x"]}),
        json.dumps({"mainSubject": "Bitcoin", "searchQueries": []}),
        RuntimeError("connection reset"),
        TimeoutError(),
    ])
    def test_failures_use_fallback(self, response):
        entities = EntityExtractor(mock_llm(response)).extract(self.CLAIM)
        assert entities == fallback_entities(self.CLAIM.text)
        assert entities.main_subject == "Bitcoin"

    def test_no_model_uses_fallback(self):
        entities = EntityExtractor().extract(self.CLAIM)
        assert entities.main_subject == "Bitcoin"
        assert entities.search_queries[0] == "Bitcoin will reach $100,000"

    def test_fallback_queries_combine_main_subject(self):
        entities = fallback_entities("Bitcoin will reach $100,000")
        assert entities.search_queries == [
            "Bitcoin will reach $100,000",
            "Bitcoin will",
            "Bitcoin reach",
            "Bitcoin $100",
        ]
        assert entities.context == "Bitcoin will reach $100,000"

    def test_fallback_short_tokens_only(self):
        entities = fallback_entities("Is it so?")
        assert entities.main_subject == "Is it so?"
        assert entities.search_queries == ["Is it so?"]

    def test_fallback_context_truncated(self):
        text = "Election " + "x" * 200
        assert len(fallback_entities(text).context) == 100

    def test_meaningful_tokens_split_on_commas(self):
        assert meaningful_tokens("Paris,London and NY") == ["Paris", "London"]


class TestSourceQueries:

    @pytest.fixture
    def entities(self):
        return EntitySet(
            main_subject="Bitcoin",
            secondary_entities=["ETF"],
            keywords=["price", "halving", "crypto"],
            context="",
            search_queries=["Bitcoin price"],
        )

    def test_news(self, entities):
        assert source_queries(entities, SourceType.NEWS) == [
            "Bitcoin latest news",
            "Bitcoin ETF recent",
            "breaking Bitcoin",
            "price news today",
            "halving news today",
        ]

    def test_historical(self, entities):
        assert source_queries(entities, SourceType.HISTORICAL)[:2] == [
            "Bitcoin history",
            "Bitcoin ETF historical",
        ]

    def test_academic(self, entities):
        assert source_queries(entities, SourceType.ACADEMIC) == [
            "Bitcoin research",
            "Bitcoin study",
            "Bitcoin academic",
            "scholarly Bitcoin",
        ]

    def test_general_has_no_duplicates(self, entities):
        queries = source_queries(entities, SourceType.GENERAL_KNOWLEDGE)
        assert queries == ["Bitcoin", "Bitcoin ETF", "ETF", "what is Bitcoin"]
        assert len(queries) == len(set(queries))

    def test_extractor_delegates(self, entities):
        assert EntityExtractor().queries_for(entities, SourceType.ACADEMIC) == source_queries(
            entities, SourceType.ACADEMIC
        )


def test_extraction_prompt_requests_json_only():
    prompt = build_extraction_prompt("Bitcoin will reach $100,000")
    assert 'CLAIM: "Bitcoin will reach $100,000"' in prompt
    assert "Return ONLY valid JSON" in prompt
