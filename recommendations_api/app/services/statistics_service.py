"""
Aggregate statistics over the recommendation pool.

The overview reports how many recommendations exist, how they split
between the high and low score bands used by the random draw, and the
best score currently held.  Read-only.
"""

from __future__ import annotations

from recommendations_api.app.core.db import read_transaction
from recommendations_api.app.engine.selection import partition, top_n
from recommendations_api.app.schemas.recommendation import PoolStatistics
from recommendations_api.app.services.recommendation_store import RecommendationStore


class StatisticsService:
    """Service providing pool-level metrics."""

    @classmethod
    async def overview(cls) -> PoolStatistics:
        with read_transaction() as conn:
            store = RecommendationStore(conn)
            total = store.count()
            snapshot = store.list_all_with_scores()
        high, low = partition(snapshot)
        best = top_n(snapshot, 1)
        return PoolStatistics(
            total=total,
            high_band=len(high),
            low_band=len(low),
            top_score=best[0][1] if best else None,
        )
