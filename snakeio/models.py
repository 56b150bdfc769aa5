"""Data models."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .constants import BASE_MOVE_EVERY


class Mode(Enum):
    TITLE = "title"
    PLAYING = "playing"
    PAUSED = "paused"
    EXPLODING = "exploding"
    GAMEOVER = "gameover"


class FoodKind(Enum):
    GREEN = "green"
    PURPLE = "purple"
    BOMB = "red"


FOOD_TYPES = {
    FoodKind.GREEN: {"color": "#3bff5b", "points": 1, "weight": 0.70, "bomb": False, "move_every": 12},
    FoodKind.PURPLE: {"color": "#a64dff", "points": 5, "weight": 0.22, "bomb": False, "move_every": 10},
    FoodKind.BOMB: {"color": "#ff3030", "points": 0, "weight": 0.08, "bomb": True, "move_every": 11},
}


def check_weights(table: dict) -> None:
    total = sum(entry["weight"] for entry in table.values())
    if any(entry["weight"] < 0 for entry in table.values()) or not math.isclose(total, 1.0):
        raise ValueError(f"food weights must be non-negative and sum to 1, got {total}")


check_weights(FOOD_TYPES)


@dataclass
class Food:
    x: int
    y: int
    kind: FoodKind
    vx: int = 0
    vy: int = 0
    move_every: int = BASE_MOVE_EVERY
    move_counter: int = 0

    @property
    def cell(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def points(self) -> int:
        return FOOD_TYPES[self.kind]["points"]

    @property
    def bomb(self) -> bool:
        return FOOD_TYPES[self.kind]["bomb"]

    @property
    def color(self) -> str:
        return FOOD_TYPES[self.kind]["color"]


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    life: int

    @property
    def intensity(self) -> float:
        return max(0.0, min(1.0, self.life / 20))


@dataclass
class Explosion:
    x: float
    y: float
    max_frames: int
    particles: list = field(default_factory=list)
    frame: int = 0


@dataclass
class TickEvents:
    """What happened during one gameplay tick, for the controller to act on."""

    eaten: Optional[Food] = None
    sped_up: bool = False
    new_best: bool = False
    exploded: bool = False
    died: bool = False


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the game handed to the renderer after each change."""

    mode: Mode
    cols: int
    rows: int
    snake: tuple
    direction: str
    snake_color: str
    snake_head_color: str
    foods: tuple
    score: int
    high_score: int
    speed_preset: str
    tick_ms: int
    food_speed_factor: float
    anim_tick: int
    just_ate: bool
    new_best_flash_ticks: int
    explosion: Optional[dict] = None
    reason: Optional[str] = None
    muted: bool = False
