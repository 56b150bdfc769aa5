"""Random draws and colour helpers."""

import math
import random

from .models import FOOD_TYPES, FoodKind


def weighted_pick(rng: random.Random, table: dict = FOOD_TYPES) -> FoodKind:
    """Cumulative-weight draw against a uniform sample."""
    total = sum(entry["weight"] for entry in table.values())
    r = rng.random() * total
    for kind, entry in table.items():
        r -= entry["weight"]
        if r <= 0:
            return kind
    # float residue on the last bucket
    return kind


def random_drift(rng: random.Random) -> tuple[int, int]:
    choices = (-1, 0, 1)
    vx = vy = 0
    while vx == 0 and vy == 0:
        vx = rng.choice(choices)
        vy = rng.choice(choices)
    return vx, vy


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def lighten_hex(hex_color: str, amount: float) -> str:
    """Move each channel of ``hex_color`` towards white by ``amount`` (0..1)."""
    c = hex_color.lstrip("#")
    if len(c) == 3:
        c = "".join(ch * 2 for ch in c)
    num = int(c, 16)
    channels = ((num >> 16) & 255, (num >> 8) & 255, num & 255)
    lit = [min(255, round_half_up(v + (255 - v) * amount)) for v in channels]
    return "#" + "".join(f"{v:02x}" for v in lit)


def hsl_to_hex(h: float, s: float, l: float) -> str:
    s /= 100
    l /= 100
    a = s * min(l, 1 - l)

    def channel(n):
        k = (n + h / 30) % 12
        value = l - a * max(-1, min(k - 3, min(9 - k, 1)))
        return f"{round_half_up(255 * value):02x}"

    return f"#{channel(0)}{channel(8)}{channel(4)}"


def random_snake_color(rng: random.Random) -> str:
    # hue bands skip the bomb reds
    if rng.random() < 0.8:
        lo, hi = (20, 140) if rng.random() < 0.5 else (160, 340)
        h = lo + rng.random() * (hi - lo)
    else:
        h = (rng.random() * 40 + 300) % 360
    return hsl_to_hex(h, 90, 55)
