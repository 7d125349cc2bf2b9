"""
Strategy Selection

Maps the consensus score onto a weighting strategy:

    consensus >= market_validated      -> MARKET_VALIDATED
    consensus <= evidence_contradicts  -> EVIDENCE_CONTRADICTS
    otherwise                          -> STANDARD
"""

from __future__ import annotations

from typing import Optional

from core.schemas import (
    ResolutionConfig,
    ResolutionThresholds,
    Strategy,
    WeightSet,
)


def select_strategy(consensus_score: float, thresholds: ResolutionThresholds) -> Strategy:
    if consensus_score >= thresholds.market_validated:
        return Strategy.MARKET_VALIDATED
    if consensus_score <= thresholds.evidence_contradicts:
        return Strategy.EVIDENCE_CONTRADICTS
    return Strategy.STANDARD


class StrategySelector:
    """Strategy selection and explanation bound to one ResolutionConfig."""

    def __init__(self, config: Optional[ResolutionConfig] = None) -> None:
        self.config = config or ResolutionConfig()

    def select(self, consensus_score: float) -> Strategy:
        return select_strategy(consensus_score, self.config.thresholds)

    def weights_for(self, strategy: Strategy) -> WeightSet:
        return self.config.weights_for(strategy)

    def explain(
        self,
        strategy: Strategy,
        *,
        consensus_score: float,
        evidence_count: int,
        market_probability: float,
        evidence_score: float,
    ) -> str:
        """Human-readable reason for the chosen weighting."""
        weights = self.weights_for(strategy)

        if strategy == Strategy.MARKET_VALIDATED:
            if evidence_count == 0:
                return (
                    "No contradicting evidence submitted. Market consensus appears reliable. "
                    f"Market weight increased to {weights.market:.0%}."
                )
            return (
                f"Evidence strongly supports market direction ({consensus_score:.0%} alignment). "
                f"Market weight increased to {weights.market:.0%}."
            )

        if strategy == Strategy.EVIDENCE_CONTRADICTS:
            return (
                "High-quality evidence strongly contradicts market odds "
                f"(market: {market_probability:.0%} YES, evidence: {evidence_score:.0%} YES). "
                f"Market weight reduced to {weights.market:.0%} to account for possible manipulation."
            )

        return "Evidence partially aligns with market. Using balanced weighting across all signals."
