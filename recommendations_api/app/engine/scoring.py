"""
Vote scoring rules.

A vote moves a recommendation's score by exactly one.  A downvote that
leaves the score strictly below ``SCORE_FLOOR`` removes the
recommendation from the pool.
"""

from enum import Enum
from typing import NamedTuple

SCORE_FLOOR = -5


class VoteDirection(str, Enum):
    """Direction of a vote; values match the HTTP path segments."""

    UP = "upvote"
    DOWN = "downvote"


class VoteOutcome(NamedTuple):
    new_score: int
    should_delete: bool


def apply_vote(current_score: int, direction: VoteDirection) -> VoteOutcome:
    """Return the score after one vote and whether the item must be deleted."""
    if direction is VoteDirection.UP:
        return VoteOutcome(current_score + 1, False)
    new_score = current_score - 1
    return VoteOutcome(new_score, new_score < SCORE_FLOOR)
