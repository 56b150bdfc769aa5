"""Core game state and logic."""

import logging
import math
import random
import time
from typing import Optional

from .constants import (
    COLS, ROWS, TILE, SPEEDS, DEFAULT_SPEED, MIN_TICK, SPEED_UP_STEP, SPEED_UP_EVERY,
    DIRECTIONS, OPPOSITES, BASE_FOOD_COUNT, PARTICLE_COUNT, EXPLOSION_FRAMES,
    PARTICLE_GRAVITY, NEW_BEST_FLASH_TICKS, SNAKE_COLOR, HEAD_LIGHTEN,
    FOOD_SPEED_FACTOR_MIN, FOOD_SPEED_FACTOR_MAX, REASON_WALL, REASON_SELF,
)
from .food import nudge_foods, maybe_shuffle_foods, top_up, retune_foods
from .models import Explosion, Mode, Particle, Snapshot, TickEvents
from .rng import lighten_hex, random_snake_color

logger = logging.getLogger(__name__)


def now_ms() -> float:
    return time.monotonic() * 1000


class GameState:
    def __init__(self, rng: Optional[random.Random] = None, cols: int = COLS, rows: int = ROWS,
                 high_score: int = 0, speed_preset: str = DEFAULT_SPEED):
        if speed_preset not in SPEEDS:
            raise ValueError(f"unknown speed preset {speed_preset!r}")
        self.rng = rng or random.Random()
        self.cols = cols
        self.rows = rows
        self.mode = Mode.TITLE
        self.snake: list[tuple[int, int]] = []
        self.direction = "right"
        self.next_direction = "right"
        self.foods: list = []
        self.score = 0
        self.high_score = high_score
        self.speed_preset = speed_preset
        self.tick_ms = SPEEDS[speed_preset]
        self.food_speed_factor = 1.0
        self.explosion: Optional[Explosion] = None
        self.reason: Optional[str] = None
        self.anim_tick = 0
        self.just_ate = False
        self.new_best_flash_ticks = 0
        self.last_shuffle_at = 0.0
        self.set_snake_color(SNAKE_COLOR)

    def set_snake_color(self, color: str):
        self.snake_color = color
        self.snake_head_color = lighten_hex(color, HEAD_LIGHTEN)

    def reset(self, now: Optional[float] = None):
        """Fresh snake and foods; the high score and tuning survive."""
        cx, cy = self.cols // 2, self.rows // 2
        self.snake = [(cx, cy), (cx - 1, cy), (cx - 2, cy)]
        self.direction = "right"
        self.next_direction = "right"
        self.score = 0
        self.anim_tick = 0
        self.just_ate = False
        self.new_best_flash_ticks = 0
        self.explosion = None
        self.reason = None
        self.set_snake_color(SNAKE_COLOR)
        self.foods = []
        top_up(self, BASE_FOOD_COUNT)
        self.last_shuffle_at = now_ms() if now is None else now
        self.tick_ms = SPEEDS[self.speed_preset]

    def start(self, now: Optional[float] = None):
        self.reset(now)
        self.mode = Mode.PLAYING
        logger.info("Game started at %s speed (%d ms)", self.speed_preset, self.tick_ms)

    def queue_direction(self, name: str) -> bool:
        """Buffer a direction for the next tick; an exact reversal is refused."""
        if name not in DIRECTIONS or OPPOSITES[name] == self.direction:
            return False
        self.next_direction = name
        return True

    def set_speed_preset(self, preset: str):
        if preset not in SPEEDS:
            raise ValueError(f"unknown speed preset {preset!r}")
        self.speed_preset = preset
        self.tick_ms = SPEEDS[preset]

    def adjust_food_speed(self, delta: float) -> float:
        factor = round(self.food_speed_factor + delta, 2)
        self.food_speed_factor = max(FOOD_SPEED_FACTOR_MIN, min(FOOD_SPEED_FACTOR_MAX, factor))
        retune_foods(self)
        return self.food_speed_factor

    def tick(self, now: Optional[float] = None) -> TickEvents:
        events = TickEvents()
        if self.mode != Mode.PLAYING:
            return events

        nudge_foods(self)
        maybe_shuffle_foods(self, now_ms() if now is None else now)

        self.direction = self.next_direction
        dx, dy = DIRECTIONS[self.direction]
        hx, hy = self.snake[0]
        head = (hx + dx, hy + dy)

        if not (0 <= head[0] < self.cols and 0 <= head[1] < self.rows):
            self.set_game_over(REASON_WALL)
            events.died = True
            return events
        # the tail still counts even though it would move away this tick
        if head in self.snake:
            self.set_game_over(REASON_SELF)
            events.died = True
            return events

        self.snake.insert(0, head)

        food = next((f for f in self.foods if f.cell == head), None)
        if food is not None and food.bomb:
            self.snake.pop()
            self.trigger_explosion(head)
            events.exploded = True
            return events

        if food is not None:
            self.score += food.points
            self.foods.remove(food)
            self.just_ate = True
            events.eaten = food
            self.set_snake_color(random_snake_color(self.rng))
            if self.score > self.high_score:
                self.high_score = self.score
                self.new_best_flash_ticks = NEW_BEST_FLASH_TICKS
                events.new_best = True
            top_up(self, BASE_FOOD_COUNT)
            if self.score % SPEED_UP_EVERY == 0 and self.tick_ms > MIN_TICK:
                self.tick_ms = max(MIN_TICK, self.tick_ms - SPEED_UP_STEP)
                events.sped_up = True
        else:
            self.just_ate = False
            self.snake.pop()

        if self.new_best_flash_ticks > 0:
            self.new_best_flash_ticks -= 1
        self.anim_tick += 1
        return events

    def trigger_explosion(self, cell: tuple[int, int]):
        self.mode = Mode.EXPLODING
        px = cell[0] * TILE + TILE / 2
        py = cell[1] * TILE + TILE / 2
        particles = []
        for _ in range(PARTICLE_COUNT):
            angle = self.rng.random() * math.pi * 2
            speed = 1.5 + self.rng.random() * 3.5
            particles.append(Particle(
                x=px, y=py,
                vx=math.cos(angle) * speed, vy=math.sin(angle) * speed,
                life=20 + self.rng.randrange(10),
            ))
        self.explosion = Explosion(x=px, y=py, max_frames=EXPLOSION_FRAMES, particles=particles)

    def step_explosion(self) -> bool:
        """Advance the burst one frame; False once the frame budget is spent."""
        ex = self.explosion
        ex.frame += 1
        for p in ex.particles:
            if p.life <= 0:
                continue
            p.x += p.vx
            p.y += p.vy
            p.vy += PARTICLE_GRAVITY
            p.life -= 1
        return ex.frame <= ex.max_frames

    def set_game_over(self, reason: str):
        self.mode = Mode.GAMEOVER
        self.reason = reason
        logger.info("Game over (%s) with score %d", reason, self.score)

    def snapshot(self, muted: bool = False) -> Snapshot:
        explosion = None
        if self.explosion is not None:
            ex = self.explosion
            explosion = {
                "x": ex.x,
                "y": ex.y,
                "frame": ex.frame,
                "max_frames": ex.max_frames,
                "particles": [
                    {"x": p.x, "y": p.y, "intensity": p.intensity}
                    for p in ex.particles if p.life > 0
                ],
            }
        return Snapshot(
            mode=self.mode,
            cols=self.cols,
            rows=self.rows,
            snake=tuple(self.snake),
            direction=self.direction,
            snake_color=self.snake_color,
            snake_head_color=self.snake_head_color,
            foods=tuple(
                {"x": f.x, "y": f.y, "kind": f.kind.value, "points": f.points,
                 "bomb": f.bomb, "color": f.color}
                for f in self.foods
            ),
            score=self.score,
            high_score=self.high_score,
            speed_preset=self.speed_preset,
            tick_ms=self.tick_ms,
            food_speed_factor=self.food_speed_factor,
            anim_tick=self.anim_tick,
            just_ate=self.just_ate,
            new_best_flash_ticks=self.new_best_flash_ticks,
            explosion=explosion,
            reason=self.reason,
            muted=muted,
        )
