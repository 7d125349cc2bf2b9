"""
Common test fixtures shared by all modules.

Provides factory functions for the engine's data structures:
- Claim
- EvidenceItem
- AnalysisResult and labelled analysis text
- Model responses routed by prompt
"""

import json
from typing import Any, Optional

from core.schemas import (
    AnalysisResult,
    Claim,
    EvidenceItem,
    Position,
    Recommendation,
    SourcePosition,
)


# =============================================================================
# Claim / Evidence Factories
# =============================================================================

def make_claim(
    text: str = "Will the central bank cut interest rates in March?",
    description: Optional[str] = None,
) -> Claim:
    return Claim(text=text, description=description)


def make_evidence_item(
    source: str = "BBC",
    content: str = "The central bank announced a 25 basis point cut on Wednesday.",
    relevance_score: float = 90.0,
    title: str = "Central bank cuts rates",
    url: str = "https://example.com/article",
    legitimate: Optional[bool] = None,
    against_community: Optional[bool] = None,
) -> EvidenceItem:
    """
    Create an EvidenceItem for testing.

    Args:
        source: Source name.
        content: Article text.
        relevance_score: Relevance on the 0-100 scale.

    Returns:
        A valid EvidenceItem instance.
    """
    return EvidenceItem(
        source=source,
        url=url,
        title=title,
        content=content,
        relevance_score=relevance_score,
        legitimate=legitimate,
        against_community=against_community,
    )


def make_evidence_list() -> list[EvidenceItem]:
    """BBC, Reuters and a blog, all reporting on the same event."""
    return [
        make_evidence_item("BBC", relevance_score=90.0),
        make_evidence_item(
            "Reuters",
            content="Officials confirmed the rate decision after the meeting.",
            relevance_score=80.0,
            url="https://example.com/reuters",
        ),
        make_evidence_item(
            "Local Blog",
            content="Some commentators doubt the decision will hold.",
            relevance_score=40.0,
            url="https://example.com/blog",
        ),
    ]


# =============================================================================
# Analysis Factories
# =============================================================================

def make_analysis_text(
    recommendation: str = "YES",
    confidence: str = "0.82",
    reasoning: str = "Multiple high-credibility sources confirm the rate cut.",
    key_factors: Optional[list[str]] = None,
    sources: Optional[list[tuple[str, str, str]]] = None,
) -> str:
    """Labelled analysis response in the format the analysis prompt requests."""
    if key_factors is None:
        key_factors = [
            "Central bank press release confirms the cut",
            "Reuters reports the same decision",
        ]
    if sources is None:
        sources = [
            ("BBC", "YES", "Reports the cut as announced"),
            ("Reuters", "YES", "Confirms the decision"),
        ]

    lines = [
        f"RECOMMENDATION: {recommendation}",
        f"CONFIDENCE: {confidence}",
        f"REASONING: {reasoning}",
        "",
        "KEY_FACTORS:",
        *(f"- {factor}" for factor in key_factors),
        "",
        "SOURCE_ANALYSIS:",
        *(f"{name}: {position} - {summary}" for name, position, summary in sources),
    ]
    return "\n".join(lines)


def make_analysis_result(
    recommendation: Recommendation = Recommendation.YES,
    confidence: float = 0.8,
    sources: Optional[dict[str, Position]] = None,
) -> AnalysisResult:
    source_analysis = {
        name: SourcePosition(position=position, confidence=0.5, summary="")
        for name, position in (sources or {}).items()
    }
    return AnalysisResult(
        recommendation=recommendation,
        confidence=confidence,
        reasoning="Test reasoning.",
        key_factors=[],
        source_analysis=source_analysis,
    )


def make_entities_json(
    main_subject: str = "central bank",
    search_queries: Optional[list[str]] = None,
) -> str:
    return json.dumps({
        "mainSubject": main_subject,
        "secondaryEntities": ["interest rates", "March meeting"],
        "keywords": ["central bank", "rate cut", "March"],
        "context": "Whether the central bank lowers rates in March",
        "searchQueries": search_queries or [
            "central bank rate cut March",
            "interest rate decision",
            "central bank March meeting",
        ],
    })


# =============================================================================
# Model Response Routing
# =============================================================================

def routing_response_fn(
    entities: Optional[str] = None,
    analysis: Optional[Any] = None,
):
    """
    Build a MockProvider response_fn that answers the extraction prompt with
    entity JSON and any other prompt with the analysis text.

    An Exception passed as either answer is returned so the provider raises it.
    """
    entities = make_entities_json() if entities is None else entities
    analysis = make_analysis_text() if analysis is None else analysis

    def _respond(messages, policy):
        prompt = messages[-1]["content"]
        if "extract key entities" in prompt:
            return entities
        return analysis

    return _respond
