"""
LLM Client

Provider-agnostic LLM client. The resolution components only depend on
generate(prompt) -> str; chat() is available for multi-message calls.
"""

from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Optional, TYPE_CHECKING

from .determinism import DecodingPolicy

if TYPE_CHECKING:
    from .providers import LLMProvider


logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^\s*```[a-zA-Z]*\s*\n?")
_TRAILING_FENCE = re.compile(r"\n?\s*```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove a leading ```lang and trailing ``` marker if present."""
    text = _LEADING_FENCE.sub("", text)
    text = _TRAILING_FENCE.sub("", text)
    return text.strip()


@dataclass
class LLMResponse:
    """
    Response from an LLM call.
    """
    content: str
    model: str
    provider: str
    input_tokens: int = 0
    output_tokens: int = 0
    finish_reason: str = "stop"
    latency_ms: float = 0.0
    raw_response: Optional[dict[str, Any]] = None

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def as_json(self) -> Optional[Any]:
        """
        Try to parse content as JSON.

        Returns None if parsing fails.
        """
        try:
            return json.loads(strip_code_fences(self.content))
        except json.JSONDecodeError:
            return None


class LLMClient:
    """
    Provider-agnostic LLM client.

    Usage:
        from core.llm import LLMClient, create_provider

        provider = create_provider("anthropic", api_key="...")
        client = LLMClient(provider)

        text = client.generate("Is the sky blue?")
    """

    def __init__(
        self,
        provider: "LLMProvider",
        *,
        default_policy: Optional[DecodingPolicy] = None,
    ) -> None:
        """
        Initialize LLM client.

        Args:
            provider: The LLM provider to use
            default_policy: Default decoding policy for calls
        """
        self.provider = provider
        self.default_policy = default_policy or DecodingPolicy()

    def chat(
        self,
        messages: list[dict[str, Any]],
        *,
        policy: Optional[DecodingPolicy] = None,
        system_prompt: Optional[str] = None,
    ) -> LLMResponse:
        """
        Send a chat completion request.

        Args:
            messages: List of message dicts with 'role' and 'content'
            policy: Decoding policy (temperature, etc.)
            system_prompt: Optional system prompt to prepend

        Returns:
            LLMResponse with content and metadata
        """
        effective_policy = policy or self.default_policy

        if system_prompt:
            messages = [{"role": "system", "content": system_prompt}] + messages

        started = time.perf_counter()
        try:
            response = self.provider.chat(messages=messages, policy=effective_policy)
        except Exception as e:
            logger.warning(
                f"LLM call to {self.provider.name}/{self.provider.model} failed: {e}"
            )
            raise

        response.latency_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            f"LLM {response.provider}/{response.model} answered in {response.latency_ms:.0f}ms "
            f"({response.total_tokens} tokens, finish={response.finish_reason})"
        )
        return response

    def generate(
        self,
        prompt: str,
        *,
        policy: Optional[DecodingPolicy] = None,
    ) -> str:
        """
        Simple text generation from a prompt.

        This is a convenience wrapper around chat() with a single user message.

        Returns:
            Generated text content
        """
        response = self.chat(
            messages=[{"role": "user", "content": prompt}],
            policy=policy,
        )
        return response.content

    def __repr__(self) -> str:
        return f"LLMClient(provider={self.provider.name!r}, model={self.provider.model!r})"
