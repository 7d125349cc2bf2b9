"""
CLI Resolve Command

Resolve a market claim with optional evidence from a JSON file.

Usage:
    blockcast resolve "<claim>" --market-probability 0.72 --evidence evidence.json
    blockcast resolve "<claim>" -p 0.4 --json
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from agents.collector import load_evidence_file
from agents.resolution import confidence_level
from core.schemas import Claim


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class ResolveSummary:
    """Summary of a resolution for CLI output."""
    decision: str = ""
    confidence: float = 0.0
    confidence_level: str = ""
    strategy: str = ""
    explanation: str = ""
    ai_recommendation: str = ""
    ai_confidence: float = 0.0
    evidence_count: int = 0
    consensus_score: float = 0.0
    tie_broken: bool = False
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["errors"]:
            del d["errors"]
        return d


def summarize(run) -> ResolveSummary:
    """Build the CLI summary from a ResolutionRun."""
    verdict = run.verdict
    return ResolveSummary(
        decision=verdict.decision.value,
        confidence=verdict.confidence,
        confidence_level=confidence_level(verdict.confidence),
        strategy=verdict.strategy.display_name,
        explanation=verdict.explanation,
        ai_recommendation=run.analysis.recommendation.value,
        ai_confidence=run.analysis.confidence,
        evidence_count=len(run.evidence),
        consensus_score=run.alignment.consensus_score,
        tie_broken=verdict.tie_broken,
        errors=[f"{e.stage}: {e.code} - {e.message}" for e in run.errors],
    )


def print_summary(summary: ResolveSummary, run) -> None:
    """Print a human-readable summary."""
    print(f"Decision:    {summary.decision} ({summary.confidence:.1%}, {summary.confidence_level})")
    print(f"Strategy:    {summary.strategy}")
    print(f"             {summary.explanation}")
    print(f"Consensus:   {summary.consensus_score:.2f} over {summary.evidence_count} evidence item(s)")
    print(f"AI:          {summary.ai_recommendation} ({summary.ai_confidence:.0%})")
    print()
    for name, signal in run.verdict.signals.items():
        print(f"  {name:<9} weight {signal.weight:.2f}  score {signal.score:.2f}  - {signal.reasoning}")
    if summary.tie_broken:
        print("\nBlended score was exactly 0.5; decided for the market-favoured side.")
    if summary.errors:
        print("\nDegraded stages:")
        for error in summary.errors:
            print(f"  - {error}")


def resolve_cmd(args: Namespace) -> int:
    """
    Handle the resolve command.

    Returns:
        Exit code (0=success, 1=error)
    """
    from orchestrator import create_engine

    config = args.runtime_config

    evidence = None
    if args.evidence is not None:
        evidence = load_evidence_file(args.evidence)
        logger.info(f"Loaded {len(evidence)} evidence item(s) from {args.evidence}")

    claim = Claim(text=args.claim, description=args.description)

    if not 0.0 <= args.market_probability <= 1.0:
        print(f"Error: --market-probability must be within [0, 1], got {args.market_probability}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    engine = create_engine(config)
    run = engine.run(claim, args.market_probability, evidence=evidence)

    if args.json:
        print(json.dumps(run.to_dict(), indent=2))
    else:
        print_summary(summarize(run), run)

    return EXIT_SUCCESS
