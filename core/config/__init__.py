"""
Runtime Configuration Module

Provides configuration loading and management for the resolution engine.
"""

from .runtime import (
    LLMConfig,
    PipelineConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "LLMConfig",
    "PipelineConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
