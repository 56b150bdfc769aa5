"""Game constants."""

import os

TILE = 20
COLS, ROWS = 30, 30

SPEEDS = {"slow": 160, "medium": 120, "fast": 80}
DEFAULT_SPEED = "medium"
MIN_TICK = 55
SPEED_UP_STEP = 6
SPEED_UP_EVERY = 5

DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}
OPPOSITES = {"up": "down", "down": "up", "left": "right", "right": "left"}

# Food system
BASE_FOOD_COUNT = 2
MAX_FOODS = 4
FOOD_SHUFFLE_MS = 4500
SURPRISE_SPAWN_PER_SEC = 0.28
SPAWN_ATTEMPTS = 50

# Wandering: moves once every N ticks, higher = slower
BASE_MOVE_EVERY = 10
MIN_MOVE_EVERY = 3
IDLE_CHANCE = 0.12
JITTER_CHANCE = 0.18
WANDER_RETRIES = 5

FOOD_SPEED_FACTOR_MIN = 0.6
FOOD_SPEED_FACTOR_MAX = 1.8
FOOD_SPEED_FACTOR_STEP = 0.1

# Explosion
PARTICLE_COUNT = 40
EXPLOSION_FRAMES = 26
PARTICLE_GRAVITY = 0.08
FRAME_MS = 16

NEW_BEST_FLASH_TICKS = 60

SNAKE_COLOR = "#39ff14"
HEAD_LIGHTEN = 0.35

REASON_WALL = "GAME OVER: hit the wall"
REASON_SELF = "GAME OVER: bit your own tail"
REASON_BOMB = "BOOM! Red bomb"

HS_KEY = "snake_high_score_v3"

# Runtime settings
HOST = os.environ.get("SNAKEIO_HOST", "0.0.0.0")
PORT = int(os.environ.get("SNAKEIO_PORT", "8765"))
HIGH_SCORE_PATH = os.environ.get(
    "SNAKEIO_HIGH_SCORE_PATH",
    os.path.join(os.path.expanduser("~"), ".snakeio", "high_score.json"),
)
LOG_LEVEL = os.environ.get("SNAKEIO_LOG_LEVEL", "INFO")
