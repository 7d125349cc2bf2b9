"""
Resolution Aggregator

Blends market odds, evidence score and AI judgment into the final verdict.

    weights   = strategy weight set, evidence weight x quality multiplier,
                renormalised to sum to 1
    ai_score  = c (YES), 1 - c (NO), 0.5 (INCONCLUSIVE)
    yes_prob  = w_m * market + w_e * evidence + w_a * ai_score

yes_prob above 0.5 resolves YES, below 0.5 resolves NO. An exact 0.5 goes
to the side the market favours (YES only when market > 0.5).

Pure computation: no I/O, no model calls.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.schemas import (
    AnalysisResult,
    Decision,
    EvidenceMultipliers,
    EvidenceQuality,
    FinalVerdict,
    Recommendation,
    ResolutionConfig,
    SignalBreakdown,
    Strategy,
    WeightSet,
)


logger = logging.getLogger(__name__)

TIE_TOLERANCE = 1e-9


def evidence_multiplier(quality: EvidenceQuality, multipliers: EvidenceMultipliers) -> float:
    if quality == EvidenceQuality.LEGITIMATE_AND_CONTRARIAN:
        return multipliers.legitimate_and_contrarian
    if quality == EvidenceQuality.LEGITIMATE_ONLY:
        return multipliers.legitimate_only
    return multipliers.regular


def ai_score(ai_result: AnalysisResult) -> float:
    """AI judgment as a YES probability."""
    if ai_result.recommendation == Recommendation.YES:
        return ai_result.confidence
    if ai_result.recommendation == Recommendation.NO:
        return 1.0 - ai_result.confidence
    return 0.5


def confidence_level(confidence: float) -> str:
    """Display label for a confidence in [0, 1]."""
    if confidence >= 0.8:
        return "HIGH"
    if confidence >= 0.6:
        return "MODERATE"
    if confidence >= 0.4:
        return "LOW"
    return "VERY LOW"


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


class ResolutionAggregator:
    """Weighted blend of the three signals."""

    def __init__(self, config: Optional[ResolutionConfig] = None) -> None:
        self.config = config or ResolutionConfig()

    def effective_weights(self, strategy: Strategy, quality: EvidenceQuality) -> WeightSet:
        """Strategy weights with the evidence multiplier applied, renormalised."""
        base = self.config.weights_for(strategy)
        evidence = base.evidence * evidence_multiplier(quality, self.config.evidence_multipliers)
        total = base.market + evidence + base.ai
        return WeightSet(
            market=base.market / total,
            evidence=evidence / total,
            ai=base.ai / total,
        )

    def resolve(
        self,
        market_probability: float,
        evidence_score: float,
        ai_result: AnalysisResult,
        quality: EvidenceQuality = EvidenceQuality.REGULAR,
        *,
        strategy: Strategy = Strategy.STANDARD,
        evidence_count: int = 0,
        explanation: str = "",
    ) -> FinalVerdict:
        """
        Produce the final verdict.

        Args:
            market_probability: Market-implied YES probability
            evidence_score: Share of directional evidence on YES
            ai_result: Parsed AI analysis
            quality: Strongest quality tag in the evidence set
            strategy: Weighting strategy chosen from the consensus score
            evidence_count: Number of evidence items (for the breakdown text)
            explanation: Strategy explanation to carry into the verdict

        Raises:
            ValueError: if a probability is outside [0, 1]
        """
        for name, value in (("market_probability", market_probability), ("evidence_score", evidence_score)):
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")

        weights = self.effective_weights(strategy, quality)
        ai = ai_score(ai_result)

        signals = {
            "market": SignalBreakdown(
                score=market_probability,
                weight=weights.market,
                contribution=_clamp(market_probability * weights.market),
                reasoning=f"Current market odds: {market_probability * 100:.1f}% YES",
            ),
            "evidence": SignalBreakdown(
                score=evidence_score,
                weight=weights.evidence,
                contribution=_clamp(evidence_score * weights.evidence),
                reasoning=(
                    "No evidence submitted"
                    if evidence_count == 0
                    else f"{evidence_count} evidence submission(s) analyzed - {evidence_score * 100:.1f}% YES"
                ),
            ),
            "ai": SignalBreakdown(
                score=ai,
                weight=weights.ai,
                contribution=_clamp(ai * weights.ai),
                reasoning=(
                    f"AI recommendation: {ai_result.recommendation.value} "
                    f"with {ai_result.confidence * 100:.0f}% confidence"
                ),
            ),
        }
        yes_probability = _clamp(sum(s.contribution for s in signals.values()))

        tie_broken = abs(yes_probability - 0.5) <= TIE_TOLERANCE
        if tie_broken:
            decision = Decision.YES if market_probability > 0.5 else Decision.NO
        else:
            decision = Decision.YES if yes_probability > 0.5 else Decision.NO

        confidence = yes_probability if decision == Decision.YES else 1.0 - yes_probability

        logger.info(
            f"Final decision: {decision.value} with {confidence:.1%} confidence "
            f"({strategy.value}, yes_probability={yes_probability:.3f})"
        )

        return FinalVerdict(
            decision=decision,
            confidence=_clamp(confidence),
            yes_probability=yes_probability,
            strategy=strategy,
            breakdown=weights,
            signals=signals,
            explanation=explanation or f"{strategy.display_name} weighting applied.",
            tie_broken=tie_broken,
        )
