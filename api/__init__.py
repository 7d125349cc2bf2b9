"""
Minimal API (FastAPI)

HTTP API for the resolution engine:
- POST /extract - Extract entities and search queries from a claim
- POST /analyze - AI analysis of a claim against evidence
- POST /resolve - Full adaptive resolution
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
