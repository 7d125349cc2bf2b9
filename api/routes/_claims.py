"""Shared request helpers for the claim routes."""

from pydantic import ValidationError

from api.errors import InvalidRequestError
from api.models.requests import ClaimRequest
from core.schemas import Claim


def request_claim(request: ClaimRequest) -> Claim:
    """Build the Claim for a request, mapping validation failures to 400."""
    try:
        return request.to_claim()
    except ValidationError as e:
        raise InvalidRequestError(
            "Invalid claim",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e
