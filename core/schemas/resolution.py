"""
Schemas
File: resolution.py

Purpose: Tunable weighting configuration and the final verdict.

consensus_score measures how much evidence agrees with the market:
- 1.0 = evidence fully supports the market-favoured side
- 0.5 = evidence split
- 0.0 = evidence fully contradicts the market

The score picks one of three strategies, each bound to a WeightSet that
blends market odds, evidence and the AI judgment into the final verdict.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import ConfigurationError, ErrorCodes


WEIGHT_SUM_TOLERANCE = 1e-3


class Strategy(str, Enum):
    """Named weighting policy chosen from the consensus score."""
    MARKET_VALIDATED = "MARKET_VALIDATED"
    EVIDENCE_CONTRADICTS = "EVIDENCE_CONTRADICTS"
    STANDARD = "STANDARD"

    @property
    def display_name(self) -> str:
        return _STRATEGY_DISPLAY_NAMES[self]


_STRATEGY_DISPLAY_NAMES = {
    Strategy.MARKET_VALIDATED: "Market Validated",
    Strategy.EVIDENCE_CONTRADICTS: "Evidence Contradicts Market",
    Strategy.STANDARD: "Standard (Mixed Signals)",
}


class Decision(str, Enum):
    YES = "YES"
    NO = "NO"


class WeightSet(BaseModel):
    """Relative influence of the three signals. Must sum to 1.0."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    market: float = Field(..., ge=0.0, le=1.0)
    evidence: float = Field(..., ge=0.0, le=1.0)
    ai: float = Field(..., ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_sum(self) -> "WeightSet":
        total = self.total
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ValueError(f"weights must sum to 1.0, got {total:.4f}")
        return self

    @property
    def total(self) -> float:
        return self.market + self.evidence + self.ai


class ResolutionThresholds(BaseModel):
    """Consensus thresholds for strategy selection."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    market_validated: float = Field(default=0.8, ge=0.0, le=1.0)
    evidence_contradicts: float = Field(default=0.2, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_order(self) -> "ResolutionThresholds":
        if self.evidence_contradicts >= self.market_validated:
            raise ValueError(
                "evidence_contradicts must be lower than market_validated "
                f"({self.evidence_contradicts} >= {self.market_validated})"
            )
        return self


class EvidenceMultipliers(BaseModel):
    """Scale applied to the evidence weight by evidence quality."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    legitimate_and_contrarian: float = Field(default=3.0, ge=1.0)
    legitimate_only: float = Field(default=1.5, ge=1.0)
    regular: float = Field(default=1.0, ge=1.0)


def _default_weights() -> dict[Strategy, WeightSet]:
    return {
        # Nothing challenges the market: trust it more
        Strategy.MARKET_VALIDATED: WeightSet(market=0.60, evidence=0.10, ai=0.30),
        # Evidence disputes the market: lean on evidence and AI
        Strategy.EVIDENCE_CONTRADICTS: WeightSet(market=0.20, evidence=0.30, ai=0.50),
        # Mixed signals: balanced, AI as tiebreaker
        Strategy.STANDARD: WeightSet(market=0.35, evidence=0.25, ai=0.40),
    }


class ResolutionConfig(BaseModel):
    """
    Complete tunable configuration for adaptive resolution.

    Construct through from_dict() to get ConfigurationError instead of a raw
    pydantic ValidationError.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    thresholds: ResolutionThresholds = Field(default_factory=ResolutionThresholds)
    weights: dict[Strategy, WeightSet] = Field(default_factory=_default_weights)
    evidence_multipliers: EvidenceMultipliers = Field(default_factory=EvidenceMultipliers)

    @model_validator(mode="after")
    def validate_all_strategies_weighted(self) -> "ResolutionConfig":
        missing = [s.value for s in Strategy if s not in self.weights]
        if missing:
            raise ValueError(f"missing weight sets for strategies: {missing}")
        return self

    def weights_for(self, strategy: Strategy) -> WeightSet:
        return self.weights[strategy]

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ResolutionConfig":
        """
        Load from a (possibly partial) dictionary.

        Weight sets not listed keep their defaults; strategy keys are
        case-insensitive.

        Raises:
            ConfigurationError: if any value violates its invariant
        """
        data = dict(data or {})
        weights_data = data.pop("weights", None) or {}
        weights: dict[str, Any] = {s.value: w for s, w in _default_weights().items()}
        for key, value in weights_data.items():
            weights[str(key).upper()] = value
        try:
            return cls.model_validate({**data, "weights": weights})
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigurationError(
                f"Invalid resolution configuration: {problems}",
                details={"error_count": e.error_count()},
            ) from e

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


def validate_resolution_config(config: ResolutionConfig) -> ResolutionConfig:
    """
    Re-check every invariant of a configuration.

    Catches instances built with model_construct() or assembled by hand.

    Raises:
        ConfigurationError: with WEIGHTS_INVALID / THRESHOLDS_INVALID where
            the failing section can be identified
    """
    for strategy in Strategy:
        weight_set = config.weights.get(strategy)
        if weight_set is None:
            raise ConfigurationError(
                f"No weight set configured for {strategy.value}",
                code=ErrorCodes.WEIGHTS_INVALID,
            )
        if abs(weight_set.total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ConfigurationError(
                f"Invalid weights for {strategy.value} - sum is {weight_set.total:.4f}, should be 1.0",
                code=ErrorCodes.WEIGHTS_INVALID,
                details={"strategy": strategy.value},
            )

    t = config.thresholds
    if not (0.0 <= t.evidence_contradicts < t.market_validated <= 1.0):
        raise ConfigurationError(
            "Thresholds must satisfy 0 <= evidence_contradicts < market_validated <= 1 "
            f"(got {t.evidence_contradicts}, {t.market_validated})",
            code=ErrorCodes.THRESHOLDS_INVALID,
        )

    m = config.evidence_multipliers
    if min(m.legitimate_and_contrarian, m.legitimate_only, m.regular) < 1.0:
        raise ConfigurationError("Evidence multipliers must all be >= 1")

    return config


# =============================================================================
# Resolution outputs
# =============================================================================

class EvidenceAlignment(BaseModel):
    """How far the evidence agrees with the market odds."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    consensus_score: float = Field(..., ge=0.0, le=1.0)
    evidence_score: float = Field(
        ...,
        description="Share of directional evidence weight on YES",
        ge=0.0,
        le=1.0,
    )
    suspect_manipulation: bool = False
    yes_weight: float = Field(default=0.0, ge=0.0)
    no_weight: float = Field(default=0.0, ge=0.0)

    @property
    def has_directional_evidence(self) -> bool:
        return (self.yes_weight + self.no_weight) > 0


class SignalBreakdown(BaseModel):
    """Contribution of one signal to the blended YES probability."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    score: float = Field(..., ge=0.0, le=1.0)
    weight: float = Field(..., ge=0.0, le=1.0)
    contribution: float = Field(..., ge=0.0, le=1.0)
    reasoning: str = ""


class FinalVerdict(BaseModel):
    """
    Final YES/NO verdict for a market.

    yes_probability is the blended score; confidence is the probability of
    the decided side. breakdown holds the weights actually applied, after
    the evidence-quality multiplier and renormalisation.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    decision: Decision
    confidence: float = Field(..., ge=0.0, le=1.0)
    yes_probability: float = Field(..., ge=0.0, le=1.0)
    strategy: Strategy
    breakdown: WeightSet
    signals: dict[str, SignalBreakdown] = Field(default_factory=dict)
    explanation: str = ""
    tie_broken: bool = Field(
        default=False,
        description="True when the blended score was exactly 0.5",
    )
