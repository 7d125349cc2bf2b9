"""
Agent Base Classes

Defines the component interface shared by the resolution agents and the
capability protocols they are wired with.

Every agent:
1. Declares a name, a version and its capabilities
2. Receives its collaborators (language model, evidence collector) through
   its constructor
3. Returns a value object and never raises for upstream failures
"""

from __future__ import annotations

from abc import ABC
from enum import Enum
from typing import Optional, Protocol, Sequence, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from core.schemas import EvidenceItem


class AgentCapability(str, Enum):
    """
    Capabilities that an agent may have.

    Used for logging and for deciding which collaborators an agent needs.
    """
    LLM = "llm"  # Uses LLM for reasoning


@runtime_checkable
class LanguageModel(Protocol):
    """
    Text-in / text-out model capability.

    core.llm.LLMClient satisfies this protocol. Implementations may raise
    any exception on failure; callers convert failures into degraded results.
    """

    def generate(self, prompt: str) -> str:
        ...


@runtime_checkable
class EvidenceCollector(Protocol):
    """
    Search capability returning evidence for a list of queries.

    Implementations may raise EvidenceCollectionError (or any exception)
    when the search cannot complete.
    """

    def search(self, queries: Sequence[str]) -> list["EvidenceItem"]:
        ...


class BaseAgent(ABC):
    """
    Abstract base class for agents.

    Provides common functionality and enforces the agent contract.
    """

    # Subclasses must define these
    _name: str
    _version: str
    _capabilities: set[AgentCapability]

    def __init__(
        self,
        *,
        name: Optional[str] = None,
        version: Optional[str] = None,
    ) -> None:
        """
        Initialize base agent.

        Args:
            name: Override default name
            version: Override default version
        """
        self._name_override = name
        self._version_override = version

    @property
    def name(self) -> str:
        """Agent name."""
        return self._name_override or getattr(self, '_name', self.__class__.__name__)

    @property
    def version(self) -> str:
        """Agent version."""
        return self._version_override or getattr(self, '_version', 'v1')

    @property
    def capabilities(self) -> set[AgentCapability]:
        """Agent capabilities."""
        return getattr(self, '_capabilities', set())

    @property
    def uses_llm(self) -> bool:
        """Check if agent uses LLM."""
        return AgentCapability.LLM in self.capabilities

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, version={self.version!r})"
