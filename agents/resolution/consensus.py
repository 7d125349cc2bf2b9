"""
Consensus Scoring

Measures how far the model's reading of the evidence agrees with the
market odds.

Each source the model marked YES or NO votes with the relevance of the
matching evidence item, scaled by that item's quality multiplier. When no
source takes a side, the model's own recommendation votes with its
confidence. The consensus score is the share of the vote on the side the
market favours.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from core.schemas import (
    AnalysisResult,
    EvidenceAlignment,
    EvidenceItem,
    EvidenceMultipliers,
    Position,
    Recommendation,
    ResolutionThresholds,
)

from .aggregator import evidence_multiplier


logger = logging.getLogger(__name__)

# Vote of a source the model cited that is missing from the evidence list
UNMATCHED_SOURCE_WEIGHT = 0.5


def market_favours_yes(market_probability: float) -> bool:
    return market_probability > 0.5


class ConsensusScorer:
    """Evidence-vs-market alignment. Pure computation."""

    def __init__(
        self,
        thresholds: Optional[ResolutionThresholds] = None,
        multipliers: Optional[EvidenceMultipliers] = None,
    ) -> None:
        self.thresholds = thresholds or ResolutionThresholds()
        self.multipliers = multipliers or EvidenceMultipliers()

    def score(
        self,
        ai_result: AnalysisResult,
        evidence: Sequence[EvidenceItem],
        market_probability: float,
    ) -> float:
        """Consensus score in [0, 1]; 1.0 means the evidence backs the market."""
        return self.align(ai_result, evidence, market_probability).consensus_score

    def align(
        self,
        ai_result: AnalysisResult,
        evidence: Sequence[EvidenceItem],
        market_probability: float,
    ) -> EvidenceAlignment:
        """
        Full alignment analysis.

        Returns:
            EvidenceAlignment; without any directional vote the consensus
            is 1.0 and the evidence score falls back to the market odds
        """
        yes_weight, no_weight = self._directional_weights(ai_result, evidence)
        total = yes_weight + no_weight

        if total <= 0:
            return EvidenceAlignment(
                consensus_score=1.0,
                evidence_score=market_probability,
                suspect_manipulation=False,
            )

        evidence_score = yes_weight / total
        if market_favours_yes(market_probability):
            consensus = evidence_score
        else:
            consensus = 1.0 - evidence_score

        alignment = EvidenceAlignment(
            consensus_score=consensus,
            evidence_score=evidence_score,
            suspect_manipulation=consensus < self.thresholds.evidence_contradicts,
            yes_weight=yes_weight,
            no_weight=no_weight,
        )
        logger.debug(
            f"Evidence alignment: consensus={consensus:.2f}, "
            f"evidence_score={evidence_score:.2f} (yes={yes_weight:.2f}, no={no_weight:.2f})"
        )
        return alignment

    def _directional_weights(
        self,
        ai_result: AnalysisResult,
        evidence: Sequence[EvidenceItem],
    ) -> tuple[float, float]:
        votes: dict[str, float] = {}
        for item in evidence:
            key = item.source.strip().lower()
            vote = item.relevance_fraction * evidence_multiplier(item.quality, self.multipliers)
            votes[key] = max(votes.get(key, 0.0), vote)
        unmatched = UNMATCHED_SOURCE_WEIGHT * self.multipliers.regular

        yes_weight = 0.0
        no_weight = 0.0
        for name, source in ai_result.source_analysis.items():
            if source.position == Position.NEUTRAL:
                continue
            weight = votes.get(name.strip().lower(), unmatched)
            if source.position == Position.YES:
                yes_weight += weight
            else:
                no_weight += weight

        if yes_weight + no_weight == 0:
            if ai_result.recommendation == Recommendation.YES:
                yes_weight = ai_result.confidence
            elif ai_result.recommendation == Recommendation.NO:
                no_weight = ai_result.confidence

        return yes_weight, no_weight
