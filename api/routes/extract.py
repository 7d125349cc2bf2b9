"""
Extract Route

POST /extract - entities and search queries for a claim.
"""

from fastapi import APIRouter, Depends

from agents.extractor import source_queries
from api.deps import get_engine
from api.models.requests import ExtractRequest
from api.models.responses import ExtractResponse
from api.routes._claims import request_claim
from orchestrator.pipeline import ResolutionEngine


router = APIRouter(tags=["extract"])


@router.post("/extract", response_model=ExtractResponse)
def extract_entities(
    request: ExtractRequest,
    engine: ResolutionEngine = Depends(get_engine),
) -> ExtractResponse:
    """
    Extract entities from a claim.

    Falls back to local extraction when the language model is unavailable,
    so this endpoint always returns entities for a valid claim.
    """
    entities = engine.extractor.extract(request_claim(request))

    tailored = None
    if request.source_type is not None:
        tailored = source_queries(entities, request.source_type)

    return ExtractResponse(ok=True, entities=entities, source_queries=tailored)
