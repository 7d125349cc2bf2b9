"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Error models and exceptions
from .errors import (
    BlockcastError,
    BlockcastException,
    ConfigurationError,
    ErrorCodes,
    EvidenceCollectionError,
    LLMResponseError,
    ResponseParseError,
)

# Inputs
from .market import Claim
from .evidence import EvidenceItem, EvidenceQuality, evidence_quality
from .entities import EntitySet, SourceType

# AI analysis
from .analysis import (
    MISSING_REASONING,
    NO_EVIDENCE_REASONING,
    PARSE_FAILURE_FACTOR,
    PARSE_FAILURE_REASONING,
    TECHNICAL_ERROR_FACTOR,
    AnalysisResult,
    Position,
    Recommendation,
    SourcePosition,
)

# Weighting and verdict
from .resolution import (
    Decision,
    EvidenceAlignment,
    EvidenceMultipliers,
    FinalVerdict,
    ResolutionConfig,
    ResolutionThresholds,
    SignalBreakdown,
    Strategy,
    WeightSet,
    validate_resolution_config,
)

__all__ = [
    # Errors
    "BlockcastError",
    "BlockcastException",
    "ConfigurationError",
    "ErrorCodes",
    "EvidenceCollectionError",
    "LLMResponseError",
    "ResponseParseError",
    # Inputs
    "Claim",
    "EvidenceItem",
    "EvidenceQuality",
    "evidence_quality",
    "EntitySet",
    "SourceType",
    # Analysis
    "MISSING_REASONING",
    "NO_EVIDENCE_REASONING",
    "PARSE_FAILURE_FACTOR",
    "PARSE_FAILURE_REASONING",
    "TECHNICAL_ERROR_FACTOR",
    "AnalysisResult",
    "Position",
    "Recommendation",
    "SourcePosition",
    # Resolution
    "Decision",
    "EvidenceAlignment",
    "EvidenceMultipliers",
    "FinalVerdict",
    "ResolutionConfig",
    "ResolutionThresholds",
    "SignalBreakdown",
    "Strategy",
    "WeightSet",
    "validate_resolution_config",
]
