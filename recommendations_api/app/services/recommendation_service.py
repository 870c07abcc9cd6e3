"""
Service layer for music recommendations.

``RecommendationService`` is the composition root of the use cases:
it opens request-scoped connections, drives ``RecommendationStore`` and
hands stored values to the pure scoring and selection engines.

Votes run inside ``write_transaction`` so that reading the current
score, applying the vote and updating (or deleting) the row happen
under the database write lock.  Two concurrent votes on the same
recommendation are serialised and neither is lost.  Errors are
reported with the exceptions from ``core.errors``; the endpoints map
them to HTTP statuses.
"""

from __future__ import annotations

import logging
import random
import sqlite3
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError as SchemaValidationError

from recommendations_api.app.core.config import settings
from recommendations_api.app.core.db import get_connection, read_transaction, write_transaction
from recommendations_api.app.core.errors import ConflictError, NotFoundError, ValidationError
from recommendations_api.app.engine.scoring import VoteDirection, VoteOutcome, apply_vote
from recommendations_api.app.engine.selection import RandomSource, weighted_random_choice
from recommendations_api.app.schemas.recommendation import RecommendationCreate, RecommendationRead
from recommendations_api.app.services.recommendation_store import RecommendationStore

logger = logging.getLogger(__name__)

RECENT_PAGE_SIZE = 10

_random = random.Random()


class RecommendationService:
    """Use cases for submitting, voting on and retrieving recommendations."""

    @classmethod
    async def create_recommendation(
        cls, data: Union[RecommendationCreate, Mapping[str, Any]]
    ) -> RecommendationRead:
        """Insert a new recommendation with score 0 and return it.

        ``data`` may be an already validated schema or a raw mapping.
        Raises ``ValidationError`` for malformed input and
        ``ConflictError`` if the name is taken.
        """
        if not isinstance(data, RecommendationCreate):
            try:
                data = RecommendationCreate(**data)
            except SchemaValidationError as exc:
                raise ValidationError(str(exc)) from exc

        with write_transaction() as conn:
            store = RecommendationStore(conn)
            if store.get_by_name(data.name) is not None:
                raise ConflictError(f"Recommendation '{data.name}' already exists")
            try:
                created = store.insert(data.name, data.link)
            except sqlite3.IntegrityError as exc:
                raise ConflictError(f"Recommendation '{data.name}' already exists") from exc
        logger.info("Created recommendation %s (%s)", created.id, created.name)
        return created

    @classmethod
    async def vote(cls, recommendation_id: int, direction: VoteDirection) -> VoteOutcome:
        """Apply one vote; delete the recommendation if it drops below the floor.

        The vote succeeds even when it removes the recommendation.
        Raises ``NotFoundError`` for an unknown id.
        """
        with write_transaction() as conn:
            store = RecommendationStore(conn)
            recommendation = store.get_by_id(recommendation_id)
            if recommendation is None:
                raise NotFoundError(f"Recommendation {recommendation_id} not found")
            outcome = apply_vote(recommendation.score, direction)
            if outcome.should_delete:
                store.delete(recommendation_id)
            else:
                store.update_score(recommendation_id, outcome.new_score)

        if outcome.should_delete:
            logger.info(
                "Deleted recommendation %s after %s (score %s)",
                recommendation_id,
                direction.value,
                outcome.new_score,
            )
        else:
            logger.info(
                "Recorded %s for recommendation %s (score %s)",
                direction.value,
                recommendation_id,
                outcome.new_score,
            )
        return outcome

    @classmethod
    async def upvote(cls, recommendation_id: int) -> VoteOutcome:
        return await cls.vote(recommendation_id, VoteDirection.UP)

    @classmethod
    async def downvote(cls, recommendation_id: int) -> VoteOutcome:
        return await cls.vote(recommendation_id, VoteDirection.DOWN)

    @classmethod
    async def list_recent(cls) -> List[RecommendationRead]:
        """Return up to ``RECENT_PAGE_SIZE`` recommendations, newest first."""
        conn = get_connection()
        try:
            return RecommendationStore(conn).list_recent(RECENT_PAGE_SIZE)
        finally:
            conn.close()

    @classmethod
    async def get_recommendation(cls, recommendation_id: int) -> RecommendationRead:
        conn = get_connection()
        try:
            recommendation = RecommendationStore(conn).get_by_id(recommendation_id)
        finally:
            conn.close()
        if recommendation is None:
            raise NotFoundError(f"Recommendation {recommendation_id} not found")
        return recommendation

    @classmethod
    async def top(cls, amount: int) -> List[RecommendationRead]:
        """Return the ``amount`` highest scored recommendations.

        Ordered by score descending with ties broken by id ascending.
        Fewer items are returned when the pool is smaller than
        ``amount``.
        """
        if amount < 1:
            raise ValidationError("amount must be a positive integer")
        conn = get_connection()
        try:
            return RecommendationStore(conn).list_by_score_desc(amount)
        finally:
            conn.close()

    @classmethod
    async def random(cls, rng: Optional[RandomSource] = None) -> RecommendationRead:
        """Draw one recommendation, favouring those with high scores.

        ``rng`` defaults to a module level ``random.Random``; tests pass
        a deterministic source.  Raises ``NotFoundError`` when the pool
        is empty.
        """
        with read_transaction() as conn:
            store = RecommendationStore(conn)
            snapshot = store.list_all_with_scores()
            chosen_id = weighted_random_choice(
                snapshot,
                rng or _random,
                high_weight=settings.random_high_band_weight,
            )
            recommendation = store.get_by_id(chosen_id)
        logger.debug("Drew recommendation %s from %s candidates", chosen_id, len(snapshot))
        return recommendation
