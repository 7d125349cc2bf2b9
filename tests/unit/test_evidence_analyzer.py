"""
Tests for the Evidence Analyzer

Covers prompt construction, the no-evidence short circuit and the
degraded results on model failure.
"""

import pytest

from agents.analyst import EvidenceAnalyzer, build_analysis_prompt, truncate_content
from core.llm import LLMClient, MockProvider
from core.schemas import (
    NO_EVIDENCE_REASONING,
    PARSE_FAILURE_REASONING,
    TECHNICAL_ERROR_FACTOR,
    Claim,
    Recommendation,
)
from fixtures.common import make_analysis_text, make_claim, make_evidence_item, make_evidence_list


class StepTimer:
    """Timer that advances a fixed step on every read."""

    def __init__(self, step: float = 0.25):
        self.value = 0.0
        self.step = step

    def __call__(self) -> float:
        current = self.value
        self.value += self.step
        return current


class TestAnalyze:

    def test_parses_model_answer(self):
        provider = MockProvider(responses=[make_analysis_text()])
        analyzer = EvidenceAnalyzer(LLMClient(provider))

        result = analyzer.analyze(make_claim(), make_evidence_list())

        assert result.recommendation == Recommendation.YES
        assert result.confidence == pytest.approx(0.82)
        assert set(result.source_analysis) == {"BBC", "Reuters"}
        assert provider.call_count == 1

    @pytest.mark.parametrize("claim_text", ["Will it rain tomorrow?", "Bitcoin will reach $100,000"])
    def test_empty_evidence_skips_model(self, claim_text):
        provider = MockProvider(responses=[make_analysis_text()])
        analyzer = EvidenceAnalyzer(LLMClient(provider))

        result = analyzer.analyze(Claim(text=claim_text), [])

        assert result.recommendation == Recommendation.INCONCLUSIVE
        assert result.confidence == 0.0
        assert result.reasoning == NO_EVIDENCE_REASONING
        assert provider.call_count == 0

    def test_model_error_degrades(self):
        provider = MockProvider(responses=[ConnectionError("upstream unavailable")])
        result = EvidenceAnalyzer(LLMClient(provider)).analyze(make_claim(), make_evidence_list())

        assert result.recommendation == Recommendation.INCONCLUSIVE
        assert result.confidence == 0.0
        assert result.reasoning == "Analysis failed due to error: upstream unavailable"
        assert result.key_factors == [TECHNICAL_ERROR_FACTOR]

    def test_error_without_message_uses_type_name(self):
        provider = MockProvider(responses=[TimeoutError()])
        result = EvidenceAnalyzer(LLMClient(provider)).analyze(make_claim(), make_evidence_list())
        assert result.reasoning == "Analysis failed due to error: TimeoutError"

    def test_no_model_degrades(self):
        result = EvidenceAnalyzer().analyze(make_claim(), make_evidence_list())
        assert result.key_factors == [TECHNICAL_ERROR_FACTOR]
        assert "No language model configured" in result.reasoning

    def test_unparseable_answer(self):
        provider = MockProvider(responses=["I cannot help with that."])
        result = EvidenceAnalyzer(LLMClient(provider)).analyze(make_claim(), make_evidence_list())
        assert result.reasoning == PARSE_FAILURE_REASONING

    def test_processing_time_measured_from_start(self):
        provider = MockProvider(responses=[make_analysis_text()])
        analyzer = EvidenceAnalyzer(LLMClient(provider), timer=StepTimer(0.25))

        result = analyzer.analyze(make_claim(), make_evidence_list())

        assert result.processing_time_ms == pytest.approx(250.0)


class TestPrompt:

    def test_prompt_lists_sources_in_order(self):
        prompt = build_analysis_prompt(make_claim(), make_evidence_list())

        assert '**MARKET QUESTION**: "Will the central bank cut interest rates in March?"' in prompt
        assert "Sources: BBC, Reuters, Local Blog" in prompt
        assert "## Source 1: BBC" in prompt
        assert "## Source 3: Local Blog" in prompt
        assert "**Relevance Score**: 90%" in prompt
        assert "Reuters: [YES/NO/NEUTRAL]" in prompt
        assert "**MARKET DESCRIPTION**" not in prompt

    def test_prompt_includes_description(self):
        claim = make_claim(description="Resolves on the official statement.")
        prompt = build_analysis_prompt(claim, make_evidence_list())
        assert "**MARKET DESCRIPTION**: Resolves on the official statement." in prompt

    def test_repeated_source_listed_once(self):
        evidence = [make_evidence_item("BBC"), make_evidence_item("BBC", content="Follow-up report")]
        prompt = build_analysis_prompt(make_claim(), evidence)
        assert "Sources: BBC\n" in prompt
        assert prompt.count("BBC: [YES/NO/NEUTRAL]") == 1
        assert "## Source 2: BBC" in prompt

    def test_long_content_truncated(self):
        evidence = [make_evidence_item(content="a" * 50)]
        analyzer = EvidenceAnalyzer(max_evidence_chars=10)
        prompt = analyzer.build_prompt(make_claim(), evidence)
        assert "**Content**: aaaaaaaaaa [...]" in prompt
        assert "a" * 11 not in prompt

    def test_truncate_content(self):
        assert truncate_content("short", 10) == "short"
        assert truncate_content("exactly10!", 10) == "exactly10!"
        assert truncate_content("abcdefghijkl", 5) == "abcde [...]"
        assert truncate_content("no limit", 0) == "no limit"
