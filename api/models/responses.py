"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from core.schemas import (
    AnalysisResult,
    BlockcastError,
    EntitySet,
    EvidenceAlignment,
    FinalVerdict,
)


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "blockcast-resolution-api"
    version: str = "v1"


class ExtractResponse(BaseModel):
    """Response for POST /extract endpoint."""

    ok: bool = True
    entities: EntitySet
    source_queries: Optional[list[str]] = Field(
        default=None,
        description="Queries for the requested source type",
    )


class AnalyzeResponse(BaseModel):
    """Response for POST /analyze endpoint."""

    ok: bool = True
    analysis: AnalysisResult
    summary: str = Field(..., description="One-paragraph summary of the analysis")


class ResolveResponse(BaseModel):
    """Response for POST /resolve endpoint."""

    ok: bool = Field(..., description="False when any stage degraded")
    run_id: str
    verdict: FinalVerdict
    confidence_level: str = Field(..., description="HIGH, MODERATE, LOW or VERY LOW")
    analysis: AnalysisResult
    alignment: EvidenceAlignment
    entities: EntitySet
    evidence_count: int = 0
    errors: list[BlockcastError] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    """Error detail for error responses."""

    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail
