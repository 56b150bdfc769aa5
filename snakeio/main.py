"""FastAPI application: WebSocket endpoint driving a single game session."""

import asyncio
import json
import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from .audio import AudioCues
from .connection_manager import ConnectionManager, SocketRenderer, socket_sink, build_state_msg, build_welcome_msg
from .constants import HIGH_SCORE_PATH, HOST, PORT, LOG_LEVEL
from .controller import GameController
from .game import GameState
from .scheduler import Scheduler
from .storage import HighScoreStore

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

manager = ConnectionManager()
scheduler = Scheduler()
store = HighScoreStore(HIGH_SCORE_PATH)
store.load()
controller = GameController(
    GameState(),
    scheduler,
    SocketRenderer(manager),
    audio=AudioCues(lambda: socket_sink(manager)),
    store=store,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    manager.outbox = asyncio.Queue()
    pump = asyncio.create_task(manager.pump())
    logger.info("High score loaded: %d", store.value)
    yield
    scheduler.cancel()
    scheduler.cancel_frame()
    pump.cancel()
    try:
        await pump
    except asyncio.CancelledError:
        pass


app = FastAPI(lifespan=lifespan)


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    snapshot = controller.game.snapshot(muted=controller.audio.muted)
    await manager.connect(ws, build_welcome_msg(snapshot), build_state_msg(snapshot))
    try:
        while True:
            message = await ws.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                logger.debug("Ignoring non-text frame")
                continue
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                logger.debug("Ignoring malformed frame %r", raw[:64])
                continue
            if isinstance(msg, dict) and msg.get("type") == "key":
                controller.handle_key(msg.get("key"))
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(ws)


if __name__ == "__main__":
    import uvicorn
    logger.info("Snake server starting on http://%s:%d", HOST, PORT)
    uvicorn.run(app, host=HOST, port=PORT)
