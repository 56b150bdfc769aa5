"""Food spawning and wandering."""

from typing import Optional

from .constants import (
    BASE_FOOD_COUNT, MAX_FOODS, FOOD_SHUFFLE_MS, SURPRISE_SPAWN_PER_SEC,
    SPAWN_ATTEMPTS, MIN_MOVE_EVERY, IDLE_CHANCE, JITTER_CHANCE, WANDER_RETRIES,
)
from .models import FOOD_TYPES, Food, FoodKind
from .rng import weighted_pick, random_drift, round_half_up


def move_every_for(kind: FoodKind, factor: float) -> int:
    return max(MIN_MOVE_EVERY, round_half_up(FOOD_TYPES[kind]["move_every"] * factor))


def in_bounds(game, x: int, y: int) -> bool:
    return 0 <= x < game.cols and 0 <= y < game.rows


def is_cell_free(game, x: int, y: int) -> bool:
    if (x, y) in game.snake:
        return False
    return not any(f.x == x and f.y == y for f in game.foods)


def spawn_food(game, with_drift: bool = False) -> Optional[Food]:
    """Create a food of a weighted-random kind on a free cell.

    Random cells are tried first; after ``SPAWN_ATTEMPTS`` misses the board is
    scanned for the first free cell. Returns None when the board is full.
    """
    rng = game.rng
    kind = weighted_pick(rng)
    cell = None
    for _ in range(SPAWN_ATTEMPTS):
        x, y = rng.randrange(game.cols), rng.randrange(game.rows)
        if is_cell_free(game, x, y):
            cell = (x, y)
            break
    else:
        for y in range(game.rows):
            for x in range(game.cols):
                if is_cell_free(game, x, y):
                    cell = (x, y)
                    break
            if cell:
                break
    if cell is None:
        return None

    vx, vy = random_drift(rng) if with_drift else (0, 0)
    return Food(
        x=cell[0], y=cell[1], kind=kind, vx=vx, vy=vy,
        move_every=move_every_for(kind, game.food_speed_factor),
    )


def add_food(game) -> bool:
    food = spawn_food(game, with_drift=True)
    if food is None:
        return False
    game.foods.append(food)
    return True


def top_up(game, target: int = BASE_FOOD_COUNT):
    while len(game.foods) < target:
        if not add_food(game):
            break


def _bounce(game, food: Food) -> tuple[int, int]:
    nx, ny = food.x + food.vx, food.y + food.vy
    if nx < 0 or nx >= game.cols:
        food.vx *= -1
        nx = food.x + food.vx
    if ny < 0 or ny >= game.rows:
        food.vy *= -1
        ny = food.y + food.vy
    return nx, ny


def nudge_food(game, food: Food):
    food.move_counter += 1
    if food.move_counter < food.move_every:
        return
    food.move_counter = 0

    rng = game.rng
    if rng.random() < IDLE_CHANCE:
        return
    if rng.random() < JITTER_CHANCE:
        food.vx, food.vy = random_drift(rng)

    nx, ny = _bounce(game, food)
    tries = 0
    while not is_cell_free(game, nx, ny) and (nx, ny) != food.cell and tries < WANDER_RETRIES:
        food.vx, food.vy = random_drift(rng)
        nx, ny = _bounce(game, food)
        tries += 1

    if in_bounds(game, nx, ny) and is_cell_free(game, nx, ny):
        food.x, food.y = nx, ny


def nudge_foods(game):
    for food in game.foods:
        nudge_food(game, food)


def maybe_shuffle_foods(game, now_ms: float):
    """Periodic shuffle plus the per-tick surprise spawn."""
    rng = game.rng
    if now_ms - game.last_shuffle_at >= FOOD_SHUFFLE_MS:
        game.last_shuffle_at = now_ms
        count = min(len(game.foods), 1 + (1 if rng.random() < 0.5 else 0))
        for _ in range(count):
            idx = rng.randrange(len(game.foods))
            # the outgoing food still blocks its own cell while the new one is placed
            replacement = spawn_food(game, with_drift=True)
            if replacement is not None:
                game.foods[idx] = replacement
        top_up(game)
        if len(game.foods) < MAX_FOODS and rng.random() < 0.6:
            add_food(game)

    if len(game.foods) < MAX_FOODS:
        chance = SURPRISE_SPAWN_PER_SEC * (game.tick_ms / 1000)
        if rng.random() < chance:
            add_food(game)


def retune_foods(game):
    for food in game.foods:
        food.move_every = move_every_for(food.kind, game.food_speed_factor)
