"""
Agent Context

Provides dependency injection for the resolution engine, containing:
- Language model client
- Evidence collector
- Configuration
- Clock (can be frozen for determinism)
- Logger

Components receive their collaborators from the context rather than
creating their own clients, which keeps them testable with mock providers.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Protocol, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from core.config import RuntimeConfig
    from core.schemas import EvidenceItem
    from .base import EvidenceCollector, LanguageModel


class Clock(Protocol):
    """
    Protocol for time source.

    now() stamps results; monotonic() measures durations.
    """
    def now(self) -> datetime:
        """Get current UTC time."""
        ...

    def monotonic(self) -> float:
        """Seconds from an arbitrary fixed point, never going backwards."""
        ...


class RealClock:
    """Real-time clock implementation."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()


class FrozenClock:
    """
    Frozen clock for deterministic testing.

    Always returns the same time; durations measured against it are zero.
    """

    def __init__(self, frozen_time: Optional[datetime] = None) -> None:
        self._time = frozen_time or datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._time

    def monotonic(self) -> float:
        return 0.0


@dataclass
class AgentContext:
    """
    Context providing dependencies to the resolution components.

    This is the primary mechanism for dependency injection.
    Components should never create their own clients directly.

    Usage:
        ctx = AgentContext.create(config, evidence=items)
        engine = ResolutionEngine(config.resolution, ctx)
        run = engine.run(claim, 0.72)
    """

    # Core dependencies
    llm: Optional["LanguageModel"] = None
    collector: Optional["EvidenceCollector"] = None
    config: Optional["RuntimeConfig"] = None

    # Utilities
    clock: Clock = field(default_factory=RealClock)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("blockcast.agents"))

    # Execution context
    run_id: Optional[str] = None
    market_id: Optional[str] = None

    @classmethod
    def create(
        cls,
        config: "RuntimeConfig",
        *,
        evidence: Optional[Sequence["EvidenceItem"]] = None,
        collector: Optional["EvidenceCollector"] = None,
        run_id: Optional[str] = None,
        market_id: Optional[str] = None,
        deterministic: bool = False,
    ) -> "AgentContext":
        """
        Create a fully configured context.

        Args:
            config: Runtime configuration
            evidence: Fixed evidence served by a StaticEvidenceCollector
            collector: Evidence collector (takes precedence over evidence)
            run_id: Unique run identifier
            market_id: Market being processed
            deterministic: If True, use frozen clock

        Returns:
            Configured AgentContext
        """
        from core.llm import create_llm_client
        from core.llm.determinism import DecodingPolicy
        from agents.collector import StaticEvidenceCollector

        # Create LLM client if configured (mock needs no key)
        llm = None
        if config.llm.api_key or config.llm.provider.lower() == "mock":
            provider_kwargs: dict[str, Any] = {}
            if config.llm.provider.lower() != "mock":
                provider_kwargs["timeout"] = config.llm.timeout
            llm = create_llm_client(
                config.llm.provider,
                api_key=config.llm.api_key,
                model=config.llm.model,
                endpoint=config.llm.base_url,
                proxy=config.proxy,
                default_policy=DecodingPolicy(
                    temperature=config.llm.temperature,
                    max_tokens=config.llm.max_tokens,
                ),
                **provider_kwargs,
            )

        if collector is None:
            collector = StaticEvidenceCollector(evidence or [])

        clock: Clock = FrozenClock() if deterministic else RealClock()

        logger = logging.getLogger("blockcast.agents")
        if config.pipeline.debug:
            logger.setLevel(logging.DEBUG)

        return cls(
            llm=llm,
            collector=collector,
            config=config,
            clock=clock,
            logger=logger,
            run_id=run_id,
            market_id=market_id,
        )

    @classmethod
    def create_minimal(cls) -> "AgentContext":
        """
        Create a minimal context for testing.

        No language model; the collector returns nothing.
        """
        from agents.collector import StaticEvidenceCollector

        return cls(
            collector=StaticEvidenceCollector([]),
            clock=FrozenClock(),
        )

    @classmethod
    def create_mock(
        cls,
        *,
        llm_responses: Optional[list[Any]] = None,
        response_fn: Optional[Callable[..., str]] = None,
        evidence: Optional[Sequence["EvidenceItem"]] = None,
    ) -> "AgentContext":
        """
        Create a mock context for testing.

        Args:
            llm_responses: Preset LLM responses for MockProvider (Exception
                instances are raised)
            response_fn: Callable(messages, policy) producing the response
            evidence: Evidence served by the collector
        """
        from core.llm import LLMClient, MockProvider
        from agents.collector import StaticEvidenceCollector

        provider = MockProvider(responses=llm_responses or [], response_fn=response_fn)

        return cls(
            llm=LLMClient(provider),
            collector=StaticEvidenceCollector(evidence or []),
            clock=FrozenClock(),
        )

    def now(self) -> datetime:
        """Get current time from clock."""
        return self.clock.now()

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a debug message."""
        self.logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log an info message."""
        self.logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a warning message."""
        self.logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log an error message."""
        self.logger.error(msg, *args, **kwargs)
