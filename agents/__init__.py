"""
Agents Module

Resolution components and the context that wires them:
- EntityExtractor: claim -> entities and search queries
- EvidenceAnalyzer / ResponseParser: evidence -> AI judgment
- ConsensusScorer, StrategySelector, ResolutionAggregator: adaptive weighting
- StaticEvidenceCollector: evidence supplied from outside the engine
"""

from .base import AgentCapability, BaseAgent, EvidenceCollector, LanguageModel
from .context import AgentContext, Clock, FrozenClock, RealClock

from .analyst import EvidenceAnalyzer, ResponseParser
from .collector import StaticEvidenceCollector
from .extractor import EntityExtractor
from .resolution import (
    ConsensusScorer,
    ResolutionAggregator,
    StrategySelector,
    confidence_level,
    select_strategy,
)

__all__ = [
    # Base
    "AgentCapability",
    "BaseAgent",
    "EvidenceCollector",
    "LanguageModel",
    # Context
    "AgentContext",
    "Clock",
    "FrozenClock",
    "RealClock",
    # Components
    "EntityExtractor",
    "EvidenceAnalyzer",
    "ResponseParser",
    "StaticEvidenceCollector",
    "ConsensusScorer",
    "StrategySelector",
    "ResolutionAggregator",
    "confidence_level",
    "select_strategy",
]
