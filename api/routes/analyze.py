"""
Analyze Route

POST /analyze - AI analysis of a claim against supplied evidence.
"""

import logging

from fastapi import APIRouter, Depends

from api.deps import get_engine
from api.models.requests import AnalyzeRequest
from api.models.responses import AnalyzeResponse
from api.routes._claims import request_claim
from orchestrator.pipeline import ResolutionEngine


logger = logging.getLogger(__name__)

router = APIRouter(tags=["analyze"])


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze_evidence(
    request: AnalyzeRequest,
    engine: ResolutionEngine = Depends(get_engine),
) -> AnalyzeResponse:
    """Analyze evidence for a claim and return the recommendation."""
    claim = request_claim(request)
    logger.info(f"Analyzing {len(request.evidence)} evidence item(s)")

    analysis = engine.analyzer.analyze(claim, request.evidence)
    return AnalyzeResponse(ok=True, analysis=analysis, summary=analysis.summary())
