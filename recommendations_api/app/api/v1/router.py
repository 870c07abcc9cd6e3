"""
Top-level router for version 1 of the API.

Aggregates the domain routers under their prefixes.  When a new
domain is added, include its router here.
"""

from fastapi import APIRouter

from .endpoints import recommendations, statistics

router = APIRouter()

router.include_router(recommendations.router, prefix="/recommendations", tags=["recommendations"])
router.include_router(statistics.router, prefix="/statistics", tags=["statistics"])
