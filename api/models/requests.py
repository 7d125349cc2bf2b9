"""
API Request Models

Pydantic models for API request validation.
"""

from typing import Optional

from pydantic import BaseModel, Field

from core.schemas import Claim, EvidenceItem, SourceType


class ClaimRequest(BaseModel):
    """Fields shared by every request that carries a claim."""

    claim: str = Field(
        ...,
        min_length=1,
        max_length=8000,
        description="The market claim / question",
    )
    description: Optional[str] = Field(
        default=None,
        description="Optional longer market description",
    )

    def to_claim(self) -> Claim:
        return Claim(text=self.claim, description=self.description)


class ExtractRequest(ClaimRequest):
    """Request body for POST /extract endpoint."""

    source_type: Optional[SourceType] = Field(
        default=None,
        description="Also return queries tailored to this source type",
    )


class AnalyzeRequest(ClaimRequest):
    """Request body for POST /analyze endpoint."""

    evidence: list[EvidenceItem] = Field(
        default_factory=list,
        description="Evidence to analyze; an empty list yields INCONCLUSIVE",
    )


class ResolveRequest(ClaimRequest):
    """Request body for POST /resolve endpoint."""

    market_probability: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Market-implied YES probability",
    )
    evidence: Optional[list[EvidenceItem]] = Field(
        default=None,
        description="Pre-collected evidence; omitted means the server collector is searched",
    )
