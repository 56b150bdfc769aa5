import random

import pytest

from snakeio.models import FOOD_TYPES, FoodKind, check_weights
from snakeio.rng import hsl_to_hex, lighten_hex, random_drift, random_snake_color, round_half_up, weighted_pick


def test_bomb_share_converges_to_its_weight():
    rng = random.Random(7)
    n = 20000
    bombs = sum(1 for _ in range(n) if weighted_pick(rng) is FoodKind.BOMB)
    assert abs(bombs / n - 0.08) < 0.01


def test_every_kind_gets_drawn():
    rng = random.Random(3)
    seen = {weighted_pick(rng) for _ in range(2000)}
    assert seen == set(FoodKind)


def test_weights_must_sum_to_one():
    check_weights(FOOD_TYPES)
    bad = {k: dict(v, weight=0.5) for k, v in FOOD_TYPES.items()}
    with pytest.raises(ValueError):
        check_weights(bad)


def test_drift_is_never_still():
    rng = random.Random(0)
    for _ in range(500):
        vx, vy = random_drift(rng)
        assert (vx, vy) != (0, 0)
        assert vx in (-1, 0, 1) and vy in (-1, 0, 1)


def test_round_half_up():
    assert round_half_up(16.5) == 17
    assert round_half_up(2.5) == 3
    assert round_half_up(7.2) == 7


def test_colour_helpers():
    assert lighten_hex("#000000", 0.5) == "#808080"
    assert lighten_hex("#fff", 0.35) == "#ffffff"
    assert lighten_hex("#39ff14", 0) == "#39ff14"
    assert hsl_to_hex(0, 100, 50) == "#ff0000"
    assert hsl_to_hex(120, 100, 50) == "#00ff00"


def test_random_snake_color_is_hex():
    rng = random.Random(11)
    for _ in range(50):
        color = random_snake_color(rng)
        assert color.startswith("#") and len(color) == 7
        int(color[1:], 16)
