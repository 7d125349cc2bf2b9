"""
Resolve Route

POST /resolve - full adaptive resolution of a claim.

Degraded stages (no evidence, model failure, unparseable response) still
produce a verdict; they are reported in `errors` with `ok=false`.
"""

import logging

from fastapi import APIRouter, Depends

from agents.resolution import confidence_level
from api.deps import get_engine
from api.errors import InvalidRequestError
from api.models.requests import ResolveRequest
from api.models.responses import ResolveResponse
from api.routes._claims import request_claim
from orchestrator.pipeline import ResolutionEngine


logger = logging.getLogger(__name__)

router = APIRouter(tags=["resolve"])


@router.post("/resolve", response_model=ResolveResponse)
def resolve_claim(
    request: ResolveRequest,
    engine: ResolutionEngine = Depends(get_engine),
) -> ResolveResponse:
    """
    Resolve a claim.

    When `evidence` is omitted the server's evidence collector is searched
    with the extracted queries.
    """
    claim = request_claim(request)

    try:
        run = engine.run(claim, request.market_probability, evidence=request.evidence)
    except ValueError as e:
        raise InvalidRequestError(str(e)) from e

    if not run.ok:
        logger.warning(f"[{run.run_id}] Resolution degraded: {[e.code for e in run.errors]}")

    return ResolveResponse(
        ok=run.ok,
        run_id=run.run_id,
        verdict=run.verdict,
        confidence_level=confidence_level(run.verdict.confidence),
        analysis=run.analysis,
        alignment=run.alignment,
        entities=run.entities,
        evidence_count=len(run.evidence),
        errors=run.errors,
    )
