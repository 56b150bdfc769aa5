"""WebSocket connection management and state serialization."""

import asyncio
import json
import logging
from typing import Optional

from fastapi import WebSocket

from .audio import Cue
from .constants import TILE
from .models import Snapshot

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Connected clients plus an ordered outbox.

    Game callbacks are synchronous, so they ``publish`` into a queue and a
    single ``pump`` task sends messages out in the order they were produced.
    """

    def __init__(self):
        self.connections: set[WebSocket] = set()
        self.outbox: Optional[asyncio.Queue] = None

    async def connect(self, ws: WebSocket, *greeting: str):
        """Accept, send ``greeting`` directly, then start receiving broadcasts."""
        await ws.accept()
        for message in greeting:
            await ws.send_text(message)
        self.connections.add(ws)
        logger.info("Client connected (%d open)", len(self.connections))

    def disconnect(self, ws: WebSocket):
        self.connections.discard(ws)
        logger.info("Client disconnected (%d open)", len(self.connections))

    def publish(self, message: str):
        if self.outbox is None:
            self.outbox = asyncio.Queue()
        self.outbox.put_nowait(message)

    async def pump(self):
        if self.outbox is None:
            self.outbox = asyncio.Queue()
        while True:
            message = await self.outbox.get()
            await self.broadcast(message)

    async def broadcast(self, message: str):
        disconnected = []
        for ws in list(self.connections):
            try:
                await ws.send_text(message)
            except Exception:
                disconnected.append(ws)
        for ws in disconnected:
            self.connections.discard(ws)


class SocketRenderer:
    """Renderer that ships each snapshot to the browser canvas."""

    def __init__(self, manager: ConnectionManager):
        self.manager = manager

    def draw(self, snapshot: Snapshot):
        self.manager.publish(build_state_msg(snapshot))


def socket_sink(manager: ConnectionManager):
    def play(cue: Cue):
        manager.publish(build_cue_msg(cue))
    return play


def build_welcome_msg(snapshot: Snapshot) -> str:
    return json.dumps({
        "type": "welcome",
        "grid": [snapshot.cols, snapshot.rows],
        "tile": TILE,
    })


def build_cue_msg(cue: Cue) -> str:
    return json.dumps({"type": "sfx", "cue": cue.value})


def build_state_msg(snapshot: Snapshot) -> str:
    return json.dumps({
        "type": "state",
        "mode": snapshot.mode.value,
        "grid": [snapshot.cols, snapshot.rows],
        "snake": [list(cell) for cell in snapshot.snake],
        "direction": snapshot.direction,
        "snake_color": snapshot.snake_color,
        "snake_head_color": snapshot.snake_head_color,
        "foods": list(snapshot.foods),
        "score": snapshot.score,
        "high_score": snapshot.high_score,
        "speed_preset": snapshot.speed_preset,
        "tick_ms": snapshot.tick_ms,
        "food_speed_factor": snapshot.food_speed_factor,
        "anim_tick": snapshot.anim_tick,
        "just_ate": snapshot.just_ate,
        "new_best_flash_ticks": snapshot.new_best_flash_ticks,
        "explosion": snapshot.explosion,
        "reason": snapshot.reason,
        "muted": snapshot.muted,
    })
