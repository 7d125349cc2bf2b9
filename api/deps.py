"""
API Dependencies

Dependency injection for the API.
Provides the runtime configuration and the resolution engine.
"""

from __future__ import annotations

import logging
from pathlib import Path

from api.errors import ConfigurationAPIError
from core.config.runtime import RuntimeConfig
from core.schemas import ConfigurationError
from orchestrator.pipeline import ResolutionEngine, create_engine

logger = logging.getLogger(__name__)


CONFIG_SEARCH_PATHS = (
    Path("blockcast.yaml"),
    Path(".blockcast.yaml"),
    Path.home() / ".config" / "blockcast" / "config.yaml",
)


def _load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from a YAML file, then overlay environment variables.

    Search order for config file:
      1. ./blockcast.yaml
      2. ./.blockcast.yaml
      3. ~/.config/blockcast/config.yaml

    Environment variables ALWAYS override config file values.
    """
    for path in CONFIG_SEARCH_PATHS:
        if path.exists():
            logger.info(f"Loaded config from {path}")
            return RuntimeConfig.from_yaml(path).with_env_overrides()
    return RuntimeConfig.from_env()


def get_runtime_config() -> RuntimeConfig:
    """Get the server runtime configuration."""
    try:
        return _load_runtime_config()
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e.message}")
        raise ConfigurationAPIError(e.message, details=e.details) from e


def get_engine() -> ResolutionEngine:
    """
    Get a resolution engine for a request.

    Raises:
        ConfigurationAPIError: if the configuration is invalid
    """
    config = get_runtime_config()
    try:
        return create_engine(config)
    except ConfigurationError as e:
        logger.error(f"Invalid resolution configuration: {e.message}")
        raise ConfigurationAPIError(e.message, details=e.details) from e
