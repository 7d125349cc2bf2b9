"""
Collector Package

Evidence supply for the resolution engine. Searching and crawling happen
outside the engine; this package adapts externally gathered evidence to the
EvidenceCollector protocol.
"""

from agents.collector.static import (
    StaticEvidenceCollector,
    load_evidence_file,
    parse_evidence,
)

__all__ = [
    "StaticEvidenceCollector",
    "load_evidence_file",
    "parse_evidence",
]
