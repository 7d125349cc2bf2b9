"""
Schemas
File: analysis.py

Purpose: Structured result of the AI evidence analysis.

An AnalysisResult is created once per resolution attempt and never mutated.
Degraded results (no evidence, model failure, unparsable output) use the
same shape with recommendation INCONCLUSIVE.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# Canonical reasoning / key-factor strings for degraded results
NO_EVIDENCE_REASONING = "No external content found to analyze."
PARSE_FAILURE_REASONING = "Failed to parse AI analysis response."
PARSE_FAILURE_FACTOR = "Response parsing error"
TECHNICAL_ERROR_FACTOR = "Technical error during analysis"
MISSING_REASONING = "Unable to parse reasoning from AI response."

MAX_KEY_FACTORS = 5


class Recommendation(str, Enum):
    YES = "YES"
    NO = "NO"
    INCONCLUSIVE = "INCONCLUSIVE"


class Position(str, Enum):
    YES = "YES"
    NO = "NO"
    NEUTRAL = "NEUTRAL"


class SourcePosition(BaseModel):
    """Stance one source takes on the claim, as judged by the model."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    position: Position
    confidence: float = Field(..., ge=0.0, le=1.0)
    summary: str = Field(default="")


class AnalysisResult(BaseModel):
    """
    The model's judgment of a claim against the collected evidence.

    source_analysis preserves the order in which sources appeared in the
    model output; a repeated source name keeps the last entry.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    recommendation: Recommendation = Field(default=Recommendation.INCONCLUSIVE)
    confidence: float = Field(
        ...,
        description="Overall confidence (0.0 to 1.0)",
        ge=0.0,
        le=1.0,
    )
    reasoning: str = Field(default="")
    key_factors: list[str] = Field(default_factory=list, max_length=MAX_KEY_FACTORS)
    source_analysis: dict[str, SourcePosition] = Field(default_factory=dict)
    processing_time_ms: float = Field(default=0.0, ge=0.0)

    @classmethod
    def inconclusive(
        cls,
        reasoning: str,
        *,
        key_factors: list[str] | None = None,
        processing_time_ms: float = 0.0,
    ) -> "AnalysisResult":
        """Create a degraded result: INCONCLUSIVE with zero confidence."""
        return cls(
            recommendation=Recommendation.INCONCLUSIVE,
            confidence=0.0,
            reasoning=reasoning,
            key_factors=key_factors or [],
            source_analysis={},
            processing_time_ms=max(0.0, processing_time_ms),
        )

    def summary(self) -> str:
        """One-paragraph summary for display next to the market."""
        return (
            f"AI Engine analyzed {len(self.source_analysis)} external sources and "
            f"recommends: **{self.recommendation.value}** with "
            f"{self.confidence * 100:.0f}% confidence. {self.reasoning}"
        )
