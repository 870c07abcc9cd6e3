"""
Ranking and weighted random selection over a snapshot of the pool.

Both functions work on ``(id, score)`` pairs and never touch the
database.

The random draw splits the pool into two bands: recommendations scoring
above ``HIGH_SCORE_THRESHOLD`` ("high") and everything else ("low").
Each high member counts ``high_weight`` times as much as a low member,
so the high band is preferred with probability
``high_weight * len(high) / (high_weight * len(high) + len(low))``.
One random number picks the band, a uniform choice inside it yields the
id.  With ``high_weight > 1`` the high band always gets more than its
population share while every member keeps a non-zero chance, and the
draw costs exactly two calls to the random source.
"""

from enum import Enum
from typing import Iterable, List, Protocol, Sequence, Tuple

from ..core.errors import NotFoundError

HIGH_SCORE_THRESHOLD = 10
HIGH_BAND_WEIGHT = 3.0

Candidate = Tuple[int, int]


class RandomSource(Protocol):
    def random(self) -> float: ...

    def choice(self, seq: Sequence[int]) -> int: ...


class Band(str, Enum):
    HIGH = "high"
    LOW = "low"


def band_of(score: int) -> Band:
    return Band.HIGH if score > HIGH_SCORE_THRESHOLD else Band.LOW


def partition(candidates: Iterable[Candidate]) -> Tuple[List[int], List[int]]:
    """Split candidates into ``(high_ids, low_ids)`` preserving input order."""
    high: List[int] = []
    low: List[int] = []
    for rec_id, score in candidates:
        (high if band_of(score) is Band.HIGH else low).append(rec_id)
    return high, low


def validate_high_weight(high_weight: float) -> float:
    if not high_weight > 1.0 or high_weight == float("inf"):
        raise ValueError("high_weight must be a finite number greater than 1")
    return high_weight


def high_band_probability(high_count: int, low_count: int, high_weight: float = HIGH_BAND_WEIGHT) -> float:
    """Probability of drawing from the high band for the given band sizes."""
    weighted_high = high_weight * high_count
    total = weighted_high + low_count
    return weighted_high / total if total else 0.0


def choose_band(roll: float, high_probability: float) -> Band:
    """Map a roll in ``[0, 1)`` to the preferred band."""
    return Band.HIGH if roll < high_probability else Band.LOW


def weighted_random_choice(
    candidates: Iterable[Candidate],
    rng: RandomSource,
    high_weight: float = HIGH_BAND_WEIGHT,
) -> int:
    """Draw one recommendation id, favouring the high score band.

    Raises
    ------
    NotFoundError
        If ``candidates`` is empty.
    ValueError
        If ``high_weight`` is not a finite number above 1.
    """
    validate_high_weight(high_weight)
    high, low = partition(candidates)
    if not high and not low:
        raise NotFoundError("No recommendations available")

    probability = high_band_probability(len(high), len(low), high_weight)
    preferred = choose_band(rng.random(), probability)
    if preferred is Band.HIGH:
        pool = high or low
    else:
        pool = low or high
    return rng.choice(pool)


def top_n(candidates: Iterable[Candidate], amount: int) -> List[Candidate]:
    """Return the ``amount`` highest scored candidates.

    Ordered by score descending, ties by id ascending, so repeated calls
    on the same snapshot give the same result.
    """
    if amount < 1:
        return []
    ranked = sorted(candidates, key=lambda pair: (-pair[1], pair[0]))
    return ranked[:amount]
