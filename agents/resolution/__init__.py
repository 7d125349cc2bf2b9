"""
Adaptive Resolution

Consensus scoring, strategy selection and the weighted aggregation that
produces the final verdict.

Public API:
- ConsensusScorer: evidence-vs-market alignment
- StrategySelector / select_strategy: consensus score -> weighting strategy
- ResolutionAggregator: weighted blend -> FinalVerdict
- confidence_level: display label for a confidence
"""

from .aggregator import (
    ResolutionAggregator,
    ai_score,
    confidence_level,
    evidence_multiplier,
)
from .consensus import ConsensusScorer, market_favours_yes
from .strategy import StrategySelector, select_strategy

__all__ = [
    "ConsensusScorer",
    "market_favours_yes",
    "StrategySelector",
    "select_strategy",
    "ResolutionAggregator",
    "ai_score",
    "confidence_level",
    "evidence_multiplier",
]
