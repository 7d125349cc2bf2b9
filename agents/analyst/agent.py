"""
Evidence Analyzer Agent

Asks the language model for a YES/NO/INCONCLUSIVE judgment of a claim
against collected evidence and parses the answer.

Failure handling:
- No evidence: canonical INCONCLUSIVE result, the model is not called
- Model error: INCONCLUSIVE with the error message in the reasoning
- Unparsable answer: handled by ResponseParser
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Sequence

from agents.base import AgentCapability, BaseAgent, LanguageModel
from core.schemas import (
    NO_EVIDENCE_REASONING,
    TECHNICAL_ERROR_FACTOR,
    AnalysisResult,
    Claim,
    EvidenceItem,
)

from .parser import ResponseParser
from .prompts import DEFAULT_MAX_EVIDENCE_CHARS, build_analysis_prompt


logger = logging.getLogger(__name__)


class EvidenceAnalyzer(BaseAgent):
    """
    LLM evidence analysis.

    Every path returns an AnalysisResult whose processing_time_ms is
    measured from the start of analyze().
    """

    _name = "EvidenceAnalyzer"
    _version = "v1"
    _capabilities = {AgentCapability.LLM}

    def __init__(
        self,
        llm: Optional[LanguageModel] = None,
        *,
        parser: Optional[ResponseParser] = None,
        max_evidence_chars: int = DEFAULT_MAX_EVIDENCE_CHARS,
        timer: Optional[Callable[[], float]] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.llm = llm
        self.max_evidence_chars = max_evidence_chars
        self._timer = timer or time.monotonic
        self.parser = parser or ResponseParser(timer=self._timer)

    def build_prompt(self, claim: Claim, evidence: Sequence[EvidenceItem]) -> str:
        return build_analysis_prompt(claim, evidence, max_evidence_chars=self.max_evidence_chars)

    def analyze(self, claim: Claim, evidence: Sequence[EvidenceItem]) -> AnalysisResult:
        """
        Judge a claim against evidence.

        Args:
            claim: The market claim
            evidence: Evidence items, in collector order

        Returns:
            AnalysisResult (never raises)
        """
        started_at = self._timer()
        logger.info(f"Analyzing {len(evidence)} piece(s) of content for: {claim.text!r}")

        if not evidence:
            return AnalysisResult.inconclusive(
                NO_EVIDENCE_REASONING,
                processing_time_ms=self._elapsed_ms(started_at),
            )

        try:
            if self.llm is None:
                raise RuntimeError("No language model configured")
            raw = self.llm.generate(self.build_prompt(claim, evidence))
        except Exception as e:
            logger.error(f"Error during AI analysis: {e}")
            return AnalysisResult.inconclusive(
                f"Analysis failed due to error: {str(e) or type(e).__name__}",
                key_factors=[TECHNICAL_ERROR_FACTOR],
                processing_time_ms=self._elapsed_ms(started_at),
            )

        result = self.parser.parse(raw, evidence, started_at)
        logger.info(
            f"AI analysis complete: {result.recommendation.value} "
            f"({result.confidence:.0%} confidence)"
        )
        return result

    def _elapsed_ms(self, started_at: float) -> float:
        return max(0.0, (self._timer() - started_at) * 1000)
