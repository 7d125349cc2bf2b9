"""
Schemas
File: entities.py

Purpose: Structured entity/keyword set extracted from a claim.

The language model returns this as a JSON object with camelCase keys
(mainSubject, secondaryEntities, keywords, context, searchQueries); the
model accepts those keys as well as the snake_case field names.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


MAX_SECONDARY_ENTITIES = 4
MAX_KEYWORDS = 5
MAX_SEARCH_QUERIES = 5


def _clean_list(values: list[str], limit: int) -> list[str]:
    cleaned = [v.strip() for v in values if v and v.strip()]
    return cleaned[:limit]


class SourceType(str, Enum):
    """Kinds of evidence source a query list can be tailored for."""
    NEWS = "NEWS"
    HISTORICAL = "HISTORICAL"
    ACADEMIC = "ACADEMIC"
    GENERAL_KNOWLEDGE = "GENERAL_KNOWLEDGE"


class EntitySet(BaseModel):
    """
    Entities, keywords and search queries for one claim.

    Lists longer than their caps are truncated rather than rejected; a blank
    main_subject is rejected so callers fall back to local extraction.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    main_subject: str = Field(
        ...,
        description="Primary person, place, organization or event",
        min_length=1,
    )
    secondary_entities: list[str] = Field(
        default_factory=list,
        description="Related entities (up to 4)",
    )
    keywords: list[str] = Field(
        default_factory=list,
        description="Search keywords (up to 5)",
    )
    context: str = Field(default="", description="One-sentence claim summary")
    search_queries: list[str] = Field(
        ...,
        description="Search phrases for the evidence collector (1-5)",
        min_length=1,
    )

    @field_validator("main_subject")
    @classmethod
    def validate_main_subject(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("mainSubject must not be empty")
        return v

    @field_validator("context")
    @classmethod
    def strip_context(cls, v: str) -> str:
        return v.strip()

    @field_validator("secondary_entities")
    @classmethod
    def cap_secondary_entities(cls, v: list[str]) -> list[str]:
        return _clean_list(v, MAX_SECONDARY_ENTITIES)

    @field_validator("keywords")
    @classmethod
    def cap_keywords(cls, v: list[str]) -> list[str]:
        return _clean_list(v, MAX_KEYWORDS)

    @field_validator("search_queries")
    @classmethod
    def cap_search_queries(cls, v: list[str]) -> list[str]:
        cleaned = _clean_list(v, MAX_SEARCH_QUERIES)
        if not cleaned:
            raise ValueError("searchQueries must contain at least one query")
        return cleaned
