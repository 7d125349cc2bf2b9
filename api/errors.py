"""
API Error Handling

Every error leaves the API as an ErrorResponse body:

    {"ok": false, "error": {"code": "...", "message": "...", "details": {...}}}

Engine exceptions map onto HTTP status codes by their error code;
request-body validation failures are reported as INVALID_REQUEST.
"""

from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas import BlockcastException, ErrorCodes


# Engine error code -> HTTP status
_STATUS_BY_CODE = {
    ErrorCodes.CONFIGURATION_INVALID: 500,
    ErrorCodes.WEIGHTS_INVALID: 500,
    ErrorCodes.THRESHOLDS_INVALID: 500,
    ErrorCodes.INVALID_REQUEST: 400,
    ErrorCodes.EVIDENCE_SEARCH_FAILED: 502,
    ErrorCodes.LLM_FAILURE: 502,
}


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    @classmethod
    def from_exception(cls, exc: BlockcastException) -> "APIError":
        """Wrap an engine exception, keeping its code and details."""
        return cls(
            code=exc.code,
            message=exc.message,
            status_code=_STATUS_BY_CODE.get(exc.code, 500),
            details=exc.details,
        )

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code=ErrorCodes.INVALID_REQUEST,
            message=message,
            status_code=400,
            details=details,
        )


class ConfigurationAPIError(APIError):
    """The server's weighting or provider configuration is invalid."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code=ErrorCodes.CONFIGURATION_INVALID,
            message=message,
            status_code=500,
            details=details,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def engine_error_handler(request: Request, exc: BlockcastException) -> JSONResponse:
    """Handle engine exceptions that escaped a route."""
    return await api_error_handler(request, APIError.from_exception(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request-body validation failures in the standard error shape."""
    errors = [
        {"loc": [str(p) for p in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder(
            ErrorResponse(
                ok=False,
                error=ErrorDetail(
                    code=ErrorCodes.INVALID_REQUEST,
                    message="Request validation failed",
                    details={"errors": errors},
                ),
            )
        ),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
