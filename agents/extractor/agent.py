"""
Entity Extractor Agent

Turns a market claim into main subject, related entities, keywords and
search queries. One language-model call; anything short of a valid JSON
entity object falls back to local tokenization. Never raises.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from pydantic import ValidationError

from agents.base import AgentCapability, BaseAgent, LanguageModel
from core.llm import LLMClient, strip_code_fences
from core.schemas import Claim, EntitySet, LLMResponseError, SourceType

from .fallback import fallback_entities, source_queries
from .prompts import build_extraction_prompt


logger = logging.getLogger(__name__)


class EntityExtractor(BaseAgent):
    """
    LLM-backed entity extraction with a deterministic fallback.

    Without a language model every claim goes straight to the fallback.
    """

    _name = "EntityExtractor"
    _version = "v1"
    _capabilities = {AgentCapability.LLM}

    def __init__(self, llm: Optional[LanguageModel] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.llm = llm

    def extract(self, claim: Claim) -> EntitySet:
        """
        Extract entities from a claim.

        Returns:
            EntitySet from the model, or from local tokenization when the
            model fails, answers with nothing, or answers with invalid JSON
        """
        if self.llm is None:
            logger.info("No language model configured, using fallback entity extraction")
            return fallback_entities(claim.text)

        try:
            raw = self._generate(build_extraction_prompt(claim.full_text))
            entities = self._parse(raw)
        except (json.JSONDecodeError, ValidationError, LLMResponseError) as e:
            logger.warning(f"Unusable entity response, using fallback extraction: {e}")
            return fallback_entities(claim.text)
        except Exception as e:
            logger.error(f"Entity extraction failed, using fallback extraction: {e}")
            return fallback_entities(claim.text)

        logger.debug(f"Extracted entities: main_subject={entities.main_subject!r}")
        return entities

    def _generate(self, prompt: str) -> str:
        if isinstance(self.llm, LLMClient):
            return self.llm.generate(prompt, policy=self.llm.default_policy.with_json_mode())
        return self.llm.generate(prompt)

    def _parse(self, raw: str) -> EntitySet:
        cleaned = strip_code_fences(raw or "")
        if not cleaned:
            raise LLMResponseError("Empty entity extraction response")

        data = json.loads(cleaned)
        if not isinstance(data, dict):
            raise LLMResponseError(f"Expected a JSON object, got {type(data).__name__}")
        return EntitySet.model_validate(data)

    def queries_for(self, entities: EntitySet, source_type: SourceType) -> list[str]:
        """Search queries tailored to a kind of source."""
        return source_queries(entities, source_type)
