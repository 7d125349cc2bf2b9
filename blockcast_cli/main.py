"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m blockcast_cli resolve "<claim>" --market-probability P [--evidence FILE] [--json]
    python -m blockcast_cli extract "<claim>" [--json]
    python -m blockcast_cli config --show

Environment Variables:
    BLOCKCAST_LLM_PROVIDER      LLM provider (anthropic, openai, mock)
    BLOCKCAST_LLM_MODEL         LLM model
    BLOCKCAST_LLM_API_KEY       LLM API key
    BLOCKCAST_LOG_LEVEL         Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from blockcast_cli.commands import extract, resolve
from core.config import LLMConfig, RuntimeConfig
from core.llm import PROVIDER_DEFAULT_MODELS
from core.schemas import ConfigurationError


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_CONFIG_ERROR = 2


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the CLI; log lines go to stderr."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def load_runtime_config(path: Path | None) -> RuntimeConfig:
    """
    Load configuration from a YAML file (overlaid with env vars) or from env.

    Raises:
        FileNotFoundError: if path is given but missing
        ConfigurationError: if the resolution section is invalid
    """
    if path is not None:
        return RuntimeConfig.from_yaml(path).with_env_overrides()
    return RuntimeConfig.from_env()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="blockcast",
        description="BlockCast resolution CLI - extract entities and resolve market claims.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: environment only)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--provider",
        type=str,
        default=None,
        choices=["anthropic", "openai", "mock"],
        help="LLM provider (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- resolve command ---
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Resolve a market claim",
        description="Run entity extraction, AI analysis and adaptive weighting for a claim.",
    )
    resolve_parser.add_argument(
        "claim",
        type=str,
        help="The market claim to resolve",
    )
    resolve_parser.add_argument(
        "--market-probability", "-p",
        type=float,
        required=True,
        help="Market-implied YES probability (0.0 to 1.0)",
    )
    resolve_parser.add_argument(
        "--evidence", "-e",
        type=Path,
        default=None,
        help="JSON file with evidence items",
    )
    resolve_parser.add_argument(
        "--description", "-d",
        type=str,
        default=None,
        help="Optional longer market description",
    )
    resolve_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output the full run record as JSON",
    )
    resolve_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )
    resolve_parser.set_defaults(func=resolve.resolve_cmd)

    # --- extract command ---
    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract entities and search queries from a claim",
    )
    extract_parser.add_argument(
        "claim",
        type=str,
        help="The market claim",
    )
    extract_parser.add_argument(
        "--description", "-d",
        type=str,
        default=None,
        help="Optional longer market description",
    )
    extract_parser.add_argument(
        "--source-type",
        type=str,
        default=None,
        choices=["NEWS", "HISTORICAL", "ACADEMIC", "GENERAL_KNOWLEDGE"],
        help="Also print queries tailored to this source type",
    )
    extract_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    extract_parser.set_defaults(func=extract.extract_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Inspect configuration",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show the effective configuration (API key omitted)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: blockcast config --show")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=configuration error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_runtime_config(args.config)
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.provider and args.provider != config.llm.provider:
        config.llm = LLMConfig(
            provider=args.provider,
            model=PROVIDER_DEFAULT_MODELS[args.provider],
            temperature=config.llm.temperature,
            max_tokens=config.llm.max_tokens,
            timeout=config.llm.timeout,
        )

    # Setup logging
    setup_logging(level=args.log_level or config.log_level)

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
