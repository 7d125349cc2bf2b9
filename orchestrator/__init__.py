"""
Resolution Pipeline (In-Process Runtime Wiring)

Composes entity extraction, evidence collection, AI analysis and adaptive
weighting into one synchronous run.

Public API:
- ResolutionEngine: Main engine class
- ResolutionRun: Complete record of one resolution
- create_engine: Build an engine from RuntimeConfig
- create_test_engine: Engine wired to a mock language model
"""

from orchestrator.pipeline import (
    ResolutionEngine,
    ResolutionRun,
    create_engine,
    create_test_engine,
)

__all__ = [
    "ResolutionEngine",
    "ResolutionRun",
    "create_engine",
    "create_test_engine",
]
