"""API route handlers."""

from api.routes import analyze, extract, health, resolve

__all__ = ["analyze", "extract", "health", "resolve"]
