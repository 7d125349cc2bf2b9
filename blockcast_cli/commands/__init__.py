"""CLI subcommands."""

from blockcast_cli.commands import extract, resolve

__all__ = ["extract", "resolve"]
