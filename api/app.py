"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging
import os

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from api import __version__
from api.errors import (
    APIError,
    api_error_handler,
    engine_error_handler,
    generic_error_handler,
    validation_error_handler,
)
from api.routes import analyze, extract, health, resolve
from core.schemas import BlockcastException


def _resolve_log_level() -> int:
    """Resolve log level from BLOCKCAST_LOG_LEVEL, defaulting to INFO."""
    raw = os.getenv("BLOCKCAST_LOG_LEVEL", "INFO")
    return getattr(logging, raw.upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="BlockCast Resolution API",
        description="""
HTTP API for the BlockCast adaptive market resolution engine.

## Endpoints

- **POST /extract** - Entities and search queries for a claim
- **POST /analyze** - AI analysis of a claim against evidence
- **POST /resolve** - Blend market odds, evidence and AI analysis into a verdict
- **GET /health** - Health check

## Degraded Results

Model and search failures never fail a resolution. The response carries
`ok=false` and the degraded stages in `errors`.
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(BlockcastException, engine_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(extract.router)
    app.include_router(analyze.router)
    app.include_router(resolve.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
