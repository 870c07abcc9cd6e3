from __future__ import annotations

import random
from collections import Counter

import pytest

from recommendations_api.app.core.errors import NotFoundError
from recommendations_api.app.engine.selection import (
    HIGH_BAND_WEIGHT,
    Band,
    band_of,
    choose_band,
    high_band_probability,
    partition,
    top_n,
    weighted_random_choice,
)


def test_band_threshold_is_strictly_above_ten():
    assert band_of(11) is Band.HIGH
    assert band_of(10) is Band.LOW
    assert band_of(-5) is Band.LOW


def test_partition_preserves_order():
    high, low = partition([(1, 20), (2, 0), (3, 11), (4, -3)])
    assert high == [1, 3]
    assert low == [2, 4]


def test_choose_band_splits_at_probability():
    assert choose_band(0.0, 0.7) is Band.HIGH
    assert choose_band(0.69, 0.7) is Band.HIGH
    assert choose_band(0.7, 0.7) is Band.LOW
    assert choose_band(0.99, 0.7) is Band.LOW


def test_high_band_probability_exceeds_population_share():
    for high_count, low_count in [(1, 9), (5, 5), (9, 1), (99, 1)]:
        share = high_count / (high_count + low_count)
        probability = high_band_probability(high_count, low_count)
        assert share < probability < 1
    assert high_band_probability(3, 0) == 1.0
    assert high_band_probability(0, 4) == 0.0
    assert high_band_probability(1, 1, HIGH_BAND_WEIGHT) == pytest.approx(0.75)


def test_low_roll_draws_from_high_band(scripted_random):
    rng = scripted_random([0.1], pick=1)
    chosen = weighted_random_choice([(1, 50), (2, 0), (3, 12)], rng)
    assert rng.pools == [[1, 3]]
    assert chosen == 3


def test_high_roll_draws_from_low_band(scripted_random):
    rng = scripted_random([0.9])
    chosen = weighted_random_choice([(1, 50), (2, 0), (3, -2)], rng)
    assert rng.pools == [[2, 3]]
    assert chosen == 2


def test_falls_back_to_low_band_when_high_band_empty(scripted_random):
    rng = scripted_random([0.1])
    chosen = weighted_random_choice([(7, 3), (8, -5)], rng)
    assert rng.pools == [[7, 8]]
    assert chosen == 7


def test_falls_back_to_high_band_when_low_band_empty(scripted_random):
    rng = scripted_random([0.95])
    chosen = weighted_random_choice([(4, 30)], rng)
    assert rng.pools == [[4]]
    assert chosen == 4


def test_draw_uses_one_roll_and_one_choice(scripted_random):
    rng = scripted_random([0.5])
    weighted_random_choice([(1, 1)], rng)
    assert rng.rolls == []
    assert len(rng.pools) == 1


def test_empty_pool_raises_not_found(scripted_random):
    with pytest.raises(NotFoundError):
        weighted_random_choice([], scripted_random([]))


def test_every_member_is_drawn_and_high_band_is_over_represented():
    pool = [(1, 25)] + [(i, i - 5) for i in range(2, 11)]
    rng = random.Random(1234)
    counts = Counter(weighted_random_choice(pool, rng) for _ in range(3000))

    assert set(counts) == {rec_id for rec_id, _ in pool}
    # one member out of ten sits in the high band
    assert counts[1] / 3000 > 0.15


def test_high_majority_pool_still_favours_high_scorers():
    pool = [(i, 20) for i in range(1, 10)] + [(10, 0)]
    rng = random.Random(7)
    draws = 20000
    counts = Counter(weighted_random_choice(pool, rng) for _ in range(draws))

    high_share = sum(counts[i] for i in range(1, 10)) / draws
    assert high_share > 0.9
    assert counts[10] > 0
    assert min(counts[i] for i in range(1, 10)) > counts[10]


def test_custom_weight_is_honoured(scripted_random):
    # weight 1.5 over one member per band gives the high band 0.6
    assert weighted_random_choice([(1, 50), (2, 0)], scripted_random([0.59]), high_weight=1.5) == 1
    assert weighted_random_choice([(1, 50), (2, 0)], scripted_random([0.61]), high_weight=1.5) == 2


@pytest.mark.parametrize("weight", [1.0, 0.5, 0.0, -2.0, float("inf"), float("nan")])
def test_weight_that_cannot_favour_high_band_is_rejected(scripted_random, weight):
    with pytest.raises(ValueError):
        weighted_random_choice([(1, 50), (2, 0)], scripted_random([0.5]), high_weight=weight)


def test_top_n_orders_by_score_then_id():
    pool = [(5, 10), (1, 30), (3, 10), (2, 50), (4, -1)]
    assert top_n(pool, 4) == [(2, 50), (1, 30), (3, 10), (5, 10)]


def test_top_n_short_pool_and_non_positive_amount():
    pool = [(1, 3), (2, 4)]
    assert top_n(pool, 5) == [(2, 4), (1, 3)]
    assert top_n(pool, 0) == []


def test_top_n_is_stable_across_calls():
    pool = [(i, 0) for i in range(10, 0, -1)]
    assert top_n(pool, 3) == top_n(list(reversed(pool)), 3) == [(1, 0), (2, 0), (3, 0)]
