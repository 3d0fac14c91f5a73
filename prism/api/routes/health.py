"""
Health Check Route — GET /health
"""

from __future__ import annotations

from fastapi import APIRouter

from prism.core.reference_data import get_reference_table

router = APIRouter()


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": "1.0.0",
        "engine": "deterministic",
        "reference_factors": len(get_reference_table()),
    }
