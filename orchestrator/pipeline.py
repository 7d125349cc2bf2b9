"""
Resolution Pipeline

In-process runner composing the resolution components:

    extract entities -> collect evidence -> analyze -> align -> select strategy -> aggregate

Key features:
- Components receive their collaborators from the AgentContext
- Invalid weighting configuration fails at construction
- Model and search failures degrade the run instead of raising
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional, Sequence, TYPE_CHECKING

from agents import AgentContext
from agents.analyst import EvidenceAnalyzer
from agents.analyst.prompts import DEFAULT_MAX_EVIDENCE_CHARS
from agents.extractor import EntityExtractor
from agents.resolution import ConsensusScorer, ResolutionAggregator, StrategySelector

from core.schemas import (
    NO_EVIDENCE_REASONING,
    PARSE_FAILURE_REASONING,
    TECHNICAL_ERROR_FACTOR,
    AnalysisResult,
    BlockcastError,
    Claim,
    EntitySet,
    ErrorCodes,
    EvidenceAlignment,
    EvidenceItem,
    FinalVerdict,
    ResolutionConfig,
    Strategy,
    evidence_quality,
    validate_resolution_config,
)

if TYPE_CHECKING:
    from core.config import RuntimeConfig


logger = logging.getLogger(__name__)


# =============================================================================
# Run Result
# =============================================================================

@dataclass
class ResolutionRun:
    """Complete record of one resolution."""
    claim: Claim
    market_probability: float
    entities: EntitySet
    evidence: list[EvidenceItem]
    analysis: AnalysisResult
    alignment: EvidenceAlignment
    strategy: Strategy
    verdict: FinalVerdict
    resolved_at: datetime
    run_id: str
    errors: list[BlockcastError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when no stage degraded."""
        return not self.errors

    @property
    def decision(self) -> str:
        return self.verdict.decision.value

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "ok": self.ok,
            "claim": self.claim.model_dump(mode="json"),
            "market_probability": self.market_probability,
            "entities": self.entities.model_dump(mode="json"),
            "evidence_count": len(self.evidence),
            "analysis": self.analysis.model_dump(mode="json"),
            "alignment": self.alignment.model_dump(mode="json"),
            "strategy": self.strategy.value,
            "verdict": self.verdict.model_dump(mode="json"),
            "resolved_at": self.resolved_at.isoformat(),
            "errors": [e.model_dump(mode="json") for e in self.errors],
        }


# =============================================================================
# Engine
# =============================================================================

class ResolutionEngine:
    """
    Adaptive resolution engine.

    Holds no per-run state: one engine can serve concurrent resolutions as
    long as its collaborators can.
    """

    def __init__(
        self,
        config: Optional[ResolutionConfig] = None,
        ctx: Optional[AgentContext] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            config: Weighting configuration (defaults apply when omitted)
            ctx: Agent context with language model and evidence collector

        Raises:
            ConfigurationError: if the configuration violates an invariant
        """
        self.config = validate_resolution_config(config or ResolutionConfig())
        self.ctx = ctx or AgentContext.create_minimal()

        pipeline_config = self.ctx.config.pipeline if self.ctx.config else None
        self.max_evidence_items = pipeline_config.max_evidence_items if pipeline_config else None
        max_chars = pipeline_config.max_evidence_chars if pipeline_config else DEFAULT_MAX_EVIDENCE_CHARS

        self.extractor = EntityExtractor(self.ctx.llm)
        self.analyzer = EvidenceAnalyzer(
            self.ctx.llm,
            max_evidence_chars=max_chars,
            timer=self.ctx.clock.monotonic,
        )
        self.scorer = ConsensusScorer(self.config.thresholds, self.config.evidence_multipliers)
        self.selector = StrategySelector(self.config)
        self.aggregator = ResolutionAggregator(self.config)

        if self.ctx.llm is None:
            offline = [agent.name for agent in (self.extractor, self.analyzer) if agent.uses_llm]
            logger.warning(f"No language model configured; {', '.join(offline)} will run degraded")

    def run(
        self,
        claim: Claim | str,
        market_probability: float,
        *,
        evidence: Optional[Sequence[EvidenceItem]] = None,
    ) -> ResolutionRun:
        """
        Resolve a claim.

        Args:
            claim: The market claim (plain text is wrapped in a Claim)
            market_probability: Market-implied YES probability in [0, 1]
            evidence: Pre-collected evidence; when omitted the context's
                collector is searched with the extracted queries
                (either source is capped at pipeline.max_evidence_items)

        Returns:
            ResolutionRun with a well-formed verdict

        Raises:
            ValueError: if market_probability is outside [0, 1]
        """
        if not 0.0 <= market_probability <= 1.0:
            raise ValueError(f"market_probability must be within [0, 1], got {market_probability}")
        if isinstance(claim, str):
            claim = Claim(text=claim)

        run_id = self.ctx.run_id or uuid.uuid4().hex[:12]
        errors: list[BlockcastError] = []
        self.ctx.info(f"[{run_id}] Resolving claim: {claim.text!r} (market {market_probability:.1%} YES)")

        entities = self.extractor.extract(claim)

        if evidence is None:
            items = self._collect(entities, errors)
        else:
            items = self._capped(list(evidence))

        if not items:
            errors.append(BlockcastError(
                code=ErrorCodes.NO_EVIDENCE,
                message=NO_EVIDENCE_REASONING,
                stage="evidence",
            ))

        analysis = self.analyzer.analyze(claim, items)
        degraded = self._analysis_error(analysis)
        if degraded is not None:
            errors.append(degraded)

        alignment = self.scorer.align(analysis, items, market_probability)
        strategy = self.selector.select(alignment.consensus_score)
        explanation = self.selector.explain(
            strategy,
            consensus_score=alignment.consensus_score,
            evidence_count=len(items),
            market_probability=market_probability,
            evidence_score=alignment.evidence_score,
        )
        if alignment.suspect_manipulation:
            self.ctx.warning(
                f"[{run_id}] Evidence strongly contradicts market odds "
                f"(consensus {alignment.consensus_score:.2f})"
            )

        verdict = self.aggregator.resolve(
            market_probability,
            alignment.evidence_score,
            analysis,
            evidence_quality(items),
            strategy=strategy,
            evidence_count=len(items),
            explanation=explanation,
        )

        self.ctx.info(
            f"[{run_id}] {verdict.decision.value} ({verdict.confidence:.0%}) "
            f"via {strategy.display_name}"
        )

        return ResolutionRun(
            claim=claim,
            market_probability=market_probability,
            entities=entities,
            evidence=items,
            analysis=analysis,
            alignment=alignment,
            strategy=strategy,
            verdict=verdict,
            resolved_at=self.ctx.now(),
            run_id=run_id,
            errors=errors,
        )

    def _collect(self, entities: EntitySet, errors: list[BlockcastError]) -> list[EvidenceItem]:
        """Search the collector; failures leave the evidence empty."""
        if self.ctx.collector is None:
            return []
        try:
            items = list(self.ctx.collector.search(entities.search_queries))
        except Exception as e:
            logger.error(f"Evidence search failed: {e}")
            errors.append(BlockcastError(
                code=ErrorCodes.EVIDENCE_SEARCH_FAILED,
                message=str(e) or type(e).__name__,
                stage="evidence",
                details={"queries": list(entities.search_queries)},
                retryable=True,
            ))
            return []
        return self._capped(items)

    def _capped(self, items: list[EvidenceItem]) -> list[EvidenceItem]:
        if self.max_evidence_items is not None and len(items) > self.max_evidence_items:
            logger.info(f"Keeping the first {self.max_evidence_items} of {len(items)} evidence items")
            return items[: self.max_evidence_items]
        return items

    @staticmethod
    def _analysis_error(analysis: AnalysisResult) -> Optional[BlockcastError]:
        if analysis.key_factors == [TECHNICAL_ERROR_FACTOR]:
            return BlockcastError(
                code=ErrorCodes.LLM_FAILURE,
                message=analysis.reasoning,
                stage="analysis",
                retryable=True,
            )
        if analysis.reasoning == PARSE_FAILURE_REASONING:
            return BlockcastError(
                code=ErrorCodes.RESPONSE_PARSE_ERROR,
                message=analysis.reasoning,
                stage="analysis",
            )
        return None


# =============================================================================
# Factory Functions
# =============================================================================

def create_engine(
    runtime_config: Optional["RuntimeConfig"] = None,
    *,
    evidence: Optional[Sequence[EvidenceItem]] = None,
    run_id: Optional[str] = None,
) -> ResolutionEngine:
    """
    Create an engine from runtime configuration.

    Args:
        runtime_config: Runtime configuration (environment defaults when omitted)
        evidence: Fixed evidence served by the context's collector
        run_id: Run identifier for log lines

    Raises:
        ConfigurationError: if the resolution section is invalid
    """
    from core.config import get_default_config

    runtime_config = runtime_config or get_default_config()
    ctx = AgentContext.create(runtime_config, evidence=evidence, run_id=run_id)
    return ResolutionEngine(runtime_config.resolution, ctx)


def create_test_engine(
    *,
    llm_responses: Optional[list[Any]] = None,
    response_fn: Optional[Callable[..., str]] = None,
    evidence: Optional[Sequence[EvidenceItem]] = None,
    config: Optional[ResolutionConfig] = None,
) -> ResolutionEngine:
    """Engine wired to a MockProvider and a frozen clock."""
    ctx = AgentContext.create_mock(
        llm_responses=llm_responses,
        response_fn=response_fn,
        evidence=evidence,
    )
    return ResolutionEngine(config, ctx)

