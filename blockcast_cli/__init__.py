"""
BlockCast CLI

Command-line interface for the adaptive resolution engine.

Usage:
    python -m blockcast_cli resolve "<claim>" --market-probability 0.72 --evidence evidence.json
    python -m blockcast_cli extract "<claim>"
    python -m blockcast_cli config --show
"""

__version__ = "0.1.0"
