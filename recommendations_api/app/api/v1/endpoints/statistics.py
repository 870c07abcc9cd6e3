"""
Statistics endpoint for API v1.

Exposes a read-only overview of the recommendation pool: total size,
the split between the high and low score bands used by the random
draw, and the best current score.
"""

from fastapi import APIRouter

from recommendations_api.app.schemas.recommendation import PoolStatistics
from recommendations_api.app.services.statistics_service import StatisticsService

router = APIRouter()


@router.get("", response_model=PoolStatistics)
async def get_overview() -> PoolStatistics:
    return await StatisticsService.overview()
