"""
Schemas
File: evidence.py

Purpose: Evidence items produced by the external collector.
Items are consumed read-only by the analyzer, the consensus scorer and the
aggregator.
"""

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field


class EvidenceQuality(str, Enum):
    """
    Quality tag attached to evidence by reviewers outside the engine.

    Ordered from strongest to weakest.
    """
    LEGITIMATE_AND_CONTRARIAN = "legitimate_and_contrarian"
    LEGITIMATE_ONLY = "legitimate_only"
    REGULAR = "regular"

    @classmethod
    def from_flags(
        cls,
        legitimate: bool | None,
        against_community: bool | None,
    ) -> "EvidenceQuality":
        """Map the reviewer flags to a tag. Unset flags count as False."""
        if legitimate is True and against_community is True:
            return cls.LEGITIMATE_AND_CONTRARIAN
        if legitimate is True:
            return cls.LEGITIMATE_ONLY
        return cls.REGULAR

    @classmethod
    def strongest(cls, tags: Iterable["EvidenceQuality"]) -> "EvidenceQuality":
        """Return the strongest tag present, REGULAR when empty."""
        present = set(tags)
        for tag in cls:
            if tag in present:
                return tag
        return cls.REGULAR


class EvidenceItem(BaseModel):
    """
    A single piece of externally sourced text relevant to a claim.

    relevance_score is on a 0-100 scale and says nothing about the
    credibility of the source.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    source: str = Field(..., description="Source name (e.g. 'BBC')", min_length=1)
    url: str = Field(default="", description="URL the content was taken from")
    title: str = Field(default="", description="Title of the article or page")
    content: str = Field(default="", description="Extracted text content")
    relevance_score: float = Field(
        default=0.0,
        description="Relevance to the claim (0-100)",
        ge=0.0,
        le=100.0,
    )

    # Reviewer annotations, supplied from outside the engine
    legitimate: bool | None = Field(
        default=None,
        description="Reviewer marked this evidence as legitimate",
    )
    against_community: bool | None = Field(
        default=None,
        description="Reviewer marked this evidence as contradicting the market",
    )

    @property
    def quality(self) -> EvidenceQuality:
        return EvidenceQuality.from_flags(self.legitimate, self.against_community)

    @property
    def relevance_fraction(self) -> float:
        """Relevance on a 0-1 scale."""
        return self.relevance_score / 100.0


def evidence_quality(items: Iterable[EvidenceItem]) -> EvidenceQuality:
    """Quality tag for a set of evidence: the strongest tag among the items."""
    return EvidenceQuality.strongest(item.quality for item in items)
