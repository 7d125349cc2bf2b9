"""
Static Evidence Collector

Serves a fixed list of evidence items regardless of the search queries.
Used when evidence is gathered outside the engine (CLI files, API payloads,
tests).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from pydantic import ValidationError

from core.schemas import EvidenceCollectionError, EvidenceItem


logger = logging.getLogger(__name__)


class StaticEvidenceCollector:
    """
    EvidenceCollector over a fixed list of items.

    Items are returned in their original order, optionally capped at
    max_items. The queries of every search are recorded for inspection.
    """

    def __init__(
        self,
        items: Iterable[EvidenceItem],
        *,
        max_items: Optional[int] = None,
    ) -> None:
        self._items = list(items)
        self._max_items = max_items
        self.queries: list[list[str]] = []

    def search(self, queries: Sequence[str]) -> list[EvidenceItem]:
        self.queries.append(list(queries))
        items = self._items if self._max_items is None else self._items[: self._max_items]
        logger.debug(f"Static collector serving {len(items)} item(s) for {len(queries)} query(ies)")
        return list(items)

    def __len__(self) -> int:
        return len(self._items)


def parse_evidence(data: Any) -> list[EvidenceItem]:
    """
    Validate a JSON-like list of evidence objects.

    Accepts either a list of items or an object with an "evidence" list.

    Raises:
        EvidenceCollectionError: if the payload is not a list of valid items
    """
    if isinstance(data, dict) and "evidence" in data:
        data = data["evidence"]
    if not isinstance(data, list):
        raise EvidenceCollectionError("Evidence must be a JSON list of objects")

    items: list[EvidenceItem] = []
    for i, raw in enumerate(data):
        try:
            items.append(EvidenceItem.model_validate(raw))
        except ValidationError as e:
            raise EvidenceCollectionError(f"Invalid evidence item #{i}: {e.errors()[0]['msg']}") from e
    return items


def load_evidence_file(path: str | Path) -> list[EvidenceItem]:
    """
    Load evidence items from a JSON file.

    Raises:
        FileNotFoundError: if the file does not exist
        EvidenceCollectionError: if the content is not valid evidence
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Evidence file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise EvidenceCollectionError(f"Evidence file is not valid JSON: {e}") from e

    return parse_evidence(data)
