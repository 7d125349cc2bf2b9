"""
Schemas
File: market.py

Purpose: The market claim being resolved.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Claim(BaseModel):
    """
    The natural-language market question.

    Immutable input to every resolution stage.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str = Field(
        ...,
        description="The market question / claim",
        min_length=1,
        max_length=8000,
    )
    description: str | None = Field(
        default=None,
        description="Optional longer market description",
    )

    @field_validator("text")
    @classmethod
    def validate_text_not_blank(cls, v: str) -> str:
        """Reject whitespace-only claims."""
        v = v.strip()
        if not v:
            raise ValueError("claim text must not be empty or whitespace")
        return v

    @field_validator("description")
    @classmethod
    def normalize_description(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    @property
    def full_text(self) -> str:
        """Claim text with the description appended, as shown to the model."""
        if self.description:
            return f"{self.text}\n\nDescription: {self.description}"
        return self.text
