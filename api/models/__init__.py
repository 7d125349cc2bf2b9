"""API request and response models."""

from api.models.requests import AnalyzeRequest, ExtractRequest, ResolveRequest
from api.models.responses import (
    AnalyzeResponse,
    ErrorDetail,
    ErrorResponse,
    ExtractResponse,
    HealthResponse,
    ResolveResponse,
)

__all__ = [
    "AnalyzeRequest",
    "ExtractRequest",
    "ResolveRequest",
    "AnalyzeResponse",
    "ErrorDetail",
    "ErrorResponse",
    "ExtractResponse",
    "HealthResponse",
    "ResolveResponse",
]
