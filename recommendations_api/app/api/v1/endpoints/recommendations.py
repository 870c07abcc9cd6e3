"""
Recommendation endpoints for API v1.

Clients submit recommendations, vote on them and read them back by
recency, id, rank or weighted random draw.  There is no delete route:
a recommendation disappears only when a downvote pushes its score below
the floor.

The fixed paths ``/random`` and ``/top/{amount}`` are declared before
``/{recommendation_id}`` so they are not captured by the id route.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Path, status

from recommendations_api.app.core.errors import ConflictError, NotFoundError, ValidationError
from recommendations_api.app.engine.scoring import VoteDirection
from recommendations_api.app.schemas.recommendation import RecommendationCreate, RecommendationRead
from recommendations_api.app.services.recommendation_service import RecommendationService

router = APIRouter()


@router.post("", response_model=RecommendationRead, status_code=status.HTTP_201_CREATED)
async def create_recommendation(recommendation_in: RecommendationCreate) -> RecommendationRead:
    """Submit a new recommendation.

    Returns 422 for a missing or malformed name or link and 409 when
    the name is already used.
    """
    try:
        return await RecommendationService.create_recommendation(recommendation_in)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("", response_model=List[RecommendationRead])
async def list_recommendations() -> List[RecommendationRead]:
    """Return the ten most recent recommendations, newest first."""
    return await RecommendationService.list_recent()


@router.get("/random", response_model=RecommendationRead)
async def random_recommendation() -> RecommendationRead:
    """Return one recommendation drawn with a bias towards high scores.

    Returns 404 when there are no recommendations.
    """
    try:
        return await RecommendationService.random()
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/top/{amount}", response_model=List[RecommendationRead])
async def top_recommendations(
    amount: int = Path(..., ge=1, description="Number of recommendations to return"),
) -> List[RecommendationRead]:
    """Return the ``amount`` best scored recommendations, highest first."""
    return await RecommendationService.top(amount)


@router.get("/{recommendation_id}", response_model=RecommendationRead)
async def get_recommendation(recommendation_id: int) -> RecommendationRead:
    try:
        return await RecommendationService.get_recommendation(recommendation_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/{recommendation_id}/{direction}", status_code=status.HTTP_200_OK)
async def vote_recommendation(recommendation_id: int, direction: VoteDirection) -> None:
    """Upvote or downvote a recommendation.

    ``direction`` is ``upvote`` or ``downvote``.  A downvote that takes
    the score below -5 deletes the recommendation and still returns 200.
    """
    try:
        await RecommendationService.vote(recommendation_id, direction)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return None
