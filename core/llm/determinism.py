"""
LLM Decoding Controls

Decoding settings passed to every provider call:
- temperature=0 for reproducible judgments
- fixed seed when the provider supports one
- optional JSON mode (off by default; the entity extractor turns it on)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DecodingPolicy:
    """
    Controls determinism for LLM calls.

    json_mode asks the provider for a JSON object response where supported.
    """
    temperature: float = 0.0
    top_p: float = 1.0
    seed: Optional[int] = 42
    max_tokens: int = 2048
    json_mode: bool = False
    stop_sequences: tuple[str, ...] = field(default_factory=tuple)

    def with_json_mode(self) -> "DecodingPolicy":
        """Same policy, asking for a JSON object response."""
        return replace(self, json_mode=True)


def policy_to_provider_args(policy: DecodingPolicy, provider: str = "openai") -> Dict[str, Any]:
    """
    Convert DecodingPolicy to provider-specific API arguments.

    Args:
        policy: The decoding policy
        provider: Provider name (openai, anthropic)

    Returns:
        Dict of API arguments
    """
    args: Dict[str, Any] = {
        "temperature": policy.temperature,
        "max_tokens": policy.max_tokens,
        "top_p": policy.top_p,
    }

    if provider == "anthropic":
        # Anthropic accepts only one of temperature / top_p
        args.pop("top_p")
        if policy.stop_sequences:
            args["stop_sequences"] = list(policy.stop_sequences)
        return args

    if policy.seed is not None:
        args["seed"] = policy.seed
    if policy.stop_sequences:
        args["stop"] = list(policy.stop_sequences)
    return args
