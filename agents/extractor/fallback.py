"""
Local Entity Extraction

Deterministic heuristics used when the language model is unavailable or
returns something unusable, plus source-specific query expansion.
"""

from __future__ import annotations

import re

from core.schemas import EntitySet, SourceType


MIN_TOKEN_LENGTH = 4
MAX_FALLBACK_COMBINATIONS = 3

_TOKEN_SPLIT = re.compile(r"[\s,]+")


def meaningful_tokens(text: str) -> list[str]:
    """Split on whitespace/commas and keep tokens of 4+ characters."""
    return [t for t in _TOKEN_SPLIT.split(text) if len(t) >= MIN_TOKEN_LENGTH]


def fallback_entities(claim_text: str) -> EntitySet:
    """
    Build an EntitySet from the claim text alone.

    Always yields a non-empty main_subject and at least one search query
    (the claim itself).
    """
    text = claim_text.strip()
    tokens = meaningful_tokens(text)

    main_subject = tokens[0] if tokens else text[:30]
    following = tokens[1:]

    queries = [text]
    queries.extend(f"{main_subject} {token}" for token in following[:MAX_FALLBACK_COMBINATIONS])

    return EntitySet(
        main_subject=main_subject,
        secondary_entities=following[:3],
        keywords=tokens[:5],
        context=text[:100],
        search_queries=queries,
    )


def source_queries(entities: EntitySet, source_type: SourceType) -> list[str]:
    """
    Search queries tailored to one kind of evidence source.

    Args:
        entities: Extracted entities for the claim
        source_type: Kind of source the queries are meant for

    Returns:
        Ordered list of query strings without duplicates
    """
    main = entities.main_subject
    first_secondary = entities.secondary_entities[0] if entities.secondary_entities else ""

    def paired(suffix: str) -> str:
        return " ".join(part for part in (main, first_secondary, suffix) if part)

    if source_type == SourceType.NEWS:
        queries = [
            f"{main} latest news",
            paired("recent"),
            f"breaking {main}",
            *(f"{k} news today" for k in entities.keywords[:2]),
        ]
    elif source_type == SourceType.HISTORICAL:
        queries = [
            f"{main} history",
            paired("historical"),
            f"{main} background",
            f"history of {main}",
        ]
    elif source_type == SourceType.ACADEMIC:
        queries = [
            f"{main} research",
            f"{main} study",
            f"{main} academic",
            f"scholarly {main}",
        ]
    else:
        queries = [
            main,
            paired(""),
            *entities.secondary_entities[:2],
            f"what is {main}",
        ]

    # dict preserves first-seen order
    return list(dict.fromkeys(q for q in queries if q))
