"""
Evidence Analyst

LLM judgment of a claim against evidence, and the parser for the model's
answer.

Usage:
    from agents.analyst import EvidenceAnalyzer

    analyzer = EvidenceAnalyzer(llm)
    result = analyzer.analyze(claim, evidence)
    print(result.summary())
"""

from .agent import EvidenceAnalyzer
from .parser import AnalysisPayload, ResponseParser, clamp_confidence, clean_key_factors
from .prompts import build_analysis_prompt, distinct_sources, truncate_content

__all__ = [
    "EvidenceAnalyzer",
    "ResponseParser",
    "AnalysisPayload",
    "clamp_confidence",
    "clean_key_factors",
    "build_analysis_prompt",
    "distinct_sources",
    "truncate_content",
]
