"""
Analysis Response Parser

Converts raw model text into an AnalysisResult. Never raises.

Two grammars are accepted:
1. A JSON object (optionally fenced) validated against AnalysisPayload
2. The labelled plain-text format requested by the analysis prompt:

    RECOMMENDATION: YES
    CONFIDENCE: 0.82
    REASONING: ...
    KEY_FACTORS:
    - ...
    SOURCE_ANALYSIS:
    BBC: YES - ...

Both go through the same normalisation: confidence clamped to [0, 1],
bullets stripped, factors of 5 characters or fewer dropped, at most five
factors kept, per-source confidence derived from the overall confidence.
Text matching neither grammar yields the degraded parse-failure result.
"""

from __future__ import annotations

import json
import logging
import re
import time
from typing import Any, Callable, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from core.llm import strip_code_fences
from core.schemas import (
    MISSING_REASONING,
    PARSE_FAILURE_FACTOR,
    PARSE_FAILURE_REASONING,
    AnalysisResult,
    EvidenceItem,
    Position,
    Recommendation,
    ResponseParseError,
    SourcePosition,
)
from core.schemas.analysis import MAX_KEY_FACTORS


logger = logging.getLogger(__name__)

NEUTRAL_SOURCE_CONFIDENCE = 0.5
SOURCE_CONFIDENCE_FACTOR = 0.8
DEFAULT_CONFIDENCE = 0.5
MIN_KEY_FACTOR_LENGTH = 5

_LABEL = re.compile(
    r"\b(RECOMMENDATION|CONFIDENCE|REASONING|KEY_FACTORS|SOURCE_ANALYSIS)\s*:",
    re.IGNORECASE,
)
_RECOMMENDATION = re.compile(r"RECOMMENDATION:\s*\**\s*(YES|NO|INCONCLUSIVE)\b", re.IGNORECASE)
_CONFIDENCE = re.compile(r"CONFIDENCE:\s*\**\s*(-?\d+(?:\.\d+)?|-?\.\d+)", re.IGNORECASE)
_REASONING = re.compile(
    r"REASONING:\s*(.*?)(?=\n\s*KEY_FACTORS|\n\s*SOURCE_ANALYSIS|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_KEY_FACTORS = re.compile(r"KEY_FACTORS:\s*(.*?)(?=SOURCE_ANALYSIS:|\Z)", re.IGNORECASE | re.DOTALL)
_SOURCE_SECTION = re.compile(r"SOURCE_ANALYSIS:\s*(.*)\Z", re.IGNORECASE | re.DOTALL)
_SOURCE_LINE = re.compile(r"^([^:]+):\s*(YES|NO|NEUTRAL)\s*-\s*(.+)$", re.IGNORECASE)
_BULLET = re.compile(r"^[\s\-•*]+")

# A JSON answer must set at least one of these to count as an analysis
_ANALYSIS_FIELDS = frozenset({"recommendation", "confidence", "reasoning"})


def clamp_confidence(value: float) -> float:
    return max(0.0, min(1.0, value))


def clean_key_factors(lines: Sequence[str]) -> list[str]:
    """Strip bullets, drop fragments of 5 characters or fewer, keep five."""
    factors = []
    for line in lines:
        text = _BULLET.sub("", str(line)).strip()
        if len(text) > MIN_KEY_FACTOR_LENGTH:
            factors.append(text)
    return factors[:MAX_KEY_FACTORS]


def source_confidence(position: Position, overall: float) -> float:
    """NEUTRAL sources sit at 0.5; sided sources slightly below the overall confidence."""
    if position == Position.NEUTRAL:
        return NEUTRAL_SOURCE_CONFIDENCE
    return clamp_confidence(overall * SOURCE_CONFIDENCE_FACTOR)


# =============================================================================
# Structured (JSON) grammar
# =============================================================================

class SourcePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    position: Position
    summary: str = ""

    @field_validator("position", mode="before")
    @classmethod
    def upper_position(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v


class AnalysisPayload(BaseModel):
    """JSON form of the analysis; accepts camelCase and snake_case keys."""

    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)

    recommendation: str = Recommendation.INCONCLUSIVE.value
    confidence: float = DEFAULT_CONFIDENCE
    reasoning: str = ""
    key_factors: list[str] = Field(default_factory=list)
    source_analysis: dict[str, SourcePayload] = Field(default_factory=dict)

    @field_validator("recommendation", mode="before")
    @classmethod
    def normalize_recommendation(cls, v: Any) -> str:
        value = str(v or "").strip().upper()
        if value not in Recommendation.__members__:
            return Recommendation.INCONCLUSIVE.value
        return value


# =============================================================================
# Parser
# =============================================================================

class ResponseParser:
    """
    Stateless parser for analysis responses.

    The timer is only read to compute processing_time_ms; with a fixed
    timer, parsing the same text twice yields identical results.
    """

    def __init__(self, timer: Optional[Callable[[], float]] = None) -> None:
        self._timer = timer or time.monotonic

    def parse(
        self,
        raw_text: str,
        evidence: Sequence[EvidenceItem],
        started_at: float,
    ) -> AnalysisResult:
        """
        Parse model output into an AnalysisResult.

        Args:
            raw_text: Text returned by the language model
            evidence: Evidence the analysis was run on
            started_at: Timer reading when the analysis began

        Returns:
            Parsed result, or the degraded parse-failure result
        """
        try:
            result = self._parse(raw_text or "")
        except (ResponseParseError, ValidationError, ValueError) as e:
            logger.warning(f"Failed to parse AI analysis response: {e}")
            return AnalysisResult.inconclusive(
                PARSE_FAILURE_REASONING,
                key_factors=[PARSE_FAILURE_FACTOR],
                processing_time_ms=self._elapsed_ms(started_at),
            )

        self._log_unknown_sources(result, evidence)
        return result.model_copy(update={"processing_time_ms": self._elapsed_ms(started_at)})

    def _elapsed_ms(self, started_at: float) -> float:
        return max(0.0, (self._timer() - started_at) * 1000)

    def _parse(self, text: str) -> AnalysisResult:
        payload = self._structured_payload(text)
        if payload is not None:
            return self._from_payload(payload)

        if not _LABEL.search(text):
            raise ResponseParseError(
                "Response contains no analysis labels",
                details={"preview": text[:80]},
            )
        return self._from_labelled_text(text)

    def _structured_payload(self, text: str) -> Optional[AnalysisPayload]:
        cleaned = strip_code_fences(text)
        if not cleaned.startswith("{"):
            return None
        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError:
            return None
        if not isinstance(data, dict):
            return None
        try:
            payload = AnalysisPayload.model_validate(data)
        except ValidationError as e:
            logger.debug(f"JSON analysis did not match schema, trying text grammar: {e}")
            return None
        if not payload.model_fields_set & _ANALYSIS_FIELDS:
            raise ResponseParseError(
                "JSON response carries no analysis fields",
                details={"keys": sorted(data)[:10]},
            )
        return payload

    def _from_payload(self, payload: AnalysisPayload) -> AnalysisResult:
        confidence = clamp_confidence(payload.confidence)
        source_analysis = {
            name.strip(): SourcePosition(
                position=entry.position,
                confidence=source_confidence(entry.position, confidence),
                summary=entry.summary.strip(),
            )
            for name, entry in payload.source_analysis.items()
            if name.strip()
        }
        return AnalysisResult(
            recommendation=Recommendation(payload.recommendation),
            confidence=confidence,
            reasoning=payload.reasoning.strip() or MISSING_REASONING,
            key_factors=clean_key_factors(payload.key_factors),
            source_analysis=source_analysis,
        )

    def _from_labelled_text(self, text: str) -> AnalysisResult:
        match = _RECOMMENDATION.search(text)
        recommendation = Recommendation(match.group(1).upper()) if match else Recommendation.INCONCLUSIVE

        match = _CONFIDENCE.search(text)
        if match:
            confidence = clamp_confidence(float(match.group(1)))
        else:
            confidence = DEFAULT_CONFIDENCE

        match = _REASONING.search(text)
        reasoning = (match.group(1).strip() if match else "") or MISSING_REASONING

        match = _KEY_FACTORS.search(text)
        key_factors = clean_key_factors(match.group(1).split("\n")) if match else []

        # Repeated source names: last line wins, first position in order is kept
        source_analysis: dict[str, SourcePosition] = {}
        match = _SOURCE_SECTION.search(text)
        if match:
            for line in match.group(1).split("\n"):
                line_match = _SOURCE_LINE.match(line.strip())
                if not line_match:
                    continue
                name = _BULLET.sub("", line_match.group(1)).strip()
                if not name:
                    continue
                position = Position(line_match.group(2).upper())
                source_analysis[name] = SourcePosition(
                    position=position,
                    confidence=source_confidence(position, confidence),
                    summary=line_match.group(3).strip(),
                )

        return AnalysisResult(
            recommendation=recommendation,
            confidence=confidence,
            reasoning=reasoning,
            key_factors=key_factors,
            source_analysis=source_analysis,
        )

    @staticmethod
    def _log_unknown_sources(result: AnalysisResult, evidence: Sequence[EvidenceItem]) -> None:
        known = {item.source.lower() for item in evidence}
        unknown = [name for name in result.source_analysis if name.lower() not in known]
        if unknown:
            logger.debug(f"Model cited sources not present in evidence: {unknown}")
