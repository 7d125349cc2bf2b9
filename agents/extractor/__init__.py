"""
Entity Extractor

Extracts the main subject, related entities, keywords and search queries
from a market claim.

Usage:
    from agents.extractor import EntityExtractor

    extractor = EntityExtractor(llm)
    entities = extractor.extract(Claim(text="Bitcoin will reach $100,000"))
"""

from .agent import EntityExtractor
from .fallback import fallback_entities, meaningful_tokens, source_queries
from .prompts import build_extraction_prompt

__all__ = [
    "EntityExtractor",
    "fallback_entities",
    "meaningful_tokens",
    "source_queries",
    "build_extraction_prompt",
]
