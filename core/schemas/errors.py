"""
Schemas
File: errors.py

Purpose: Error taxonomy for the resolution engine.
Defines a Pydantic model for structured error communication (API responses,
run records) and Python exceptions for control flow.

Only ConfigurationError is allowed to escape the engine. Upstream and parse
failures are converted into degraded results at the component boundary.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the engine."""

    # Configuration
    CONFIGURATION_INVALID = "CONFIGURATION_INVALID"
    WEIGHTS_INVALID = "WEIGHTS_INVALID"
    THRESHOLDS_INVALID = "THRESHOLDS_INVALID"

    # Input
    NO_EVIDENCE = "NO_EVIDENCE"
    INVALID_REQUEST = "INVALID_REQUEST"

    # Upstream capabilities
    LLM_FAILURE = "LLM_FAILURE"
    LLM_EMPTY_RESPONSE = "LLM_EMPTY_RESPONSE"
    EVIDENCE_SEARCH_FAILED = "EVIDENCE_SEARCH_FAILED"

    # Parsing
    RESPONSE_PARSE_ERROR = "RESPONSE_PARSE_ERROR"
    ENTITY_PARSE_ERROR = "ENTITY_PARSE_ERROR"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class BlockcastError(BaseModel):
    """
    Error record carried alongside results instead of raising.

    Used by ResolutionRun to report which stages degraded and why.
    """

    model_config = ConfigDict(extra="forbid")

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.LLM_FAILURE],
    )
    message: str = Field(..., description="Human-readable error message")
    stage: str | None = Field(
        default=None,
        description="Pipeline stage that produced the error",
    )
    details: dict[str, Any] = Field(default_factory=dict)
    retryable: bool = Field(
        default=False,
        description="Whether the caller may retry the operation",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class BlockcastException(Exception):
    """Base exception for all resolution engine errors."""

    def __init__(
        self,
        message: str,
        code: str = "BLOCKCAST_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self, stage: str | None = None) -> BlockcastError:
        """Convert this exception to a BlockcastError model."""
        return BlockcastError(
            code=self.code,
            message=self.message,
            stage=stage,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ConfigurationError(BlockcastException):
    """Raised when weights or thresholds are invalid. Fatal at startup."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.CONFIGURATION_INVALID,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code=code, details=details, retryable=False)


class LLMResponseError(BlockcastException):
    """Raised when the language model returns nothing usable."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.LLM_FAILURE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code=code, details=details, retryable=True)


class ResponseParseError(BlockcastException):
    """Raised inside the parsers when model text matches no known grammar."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.RESPONSE_PARSE_ERROR,
            details=details,
            retryable=False,
        )


class EvidenceCollectionError(BlockcastException):
    """Raised by evidence collectors when a search cannot complete."""

    def __init__(self, message: str, queries: list[str] | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EVIDENCE_SEARCH_FAILED,
            details={"queries": queries or []},
            retryable=True,
        )
