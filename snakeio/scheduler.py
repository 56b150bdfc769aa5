"""Gameplay tick and animation frame timers on the asyncio loop."""

import asyncio
import logging
from typing import Callable, Optional

from .constants import FRAME_MS

logger = logging.getLogger(__name__)


def _log_failure(task: asyncio.Task):
    if not task.cancelled() and task.exception() is not None:
        logger.error("Tick loop stopped", exc_info=task.exception())


class Scheduler:
    """Owns at most one repeating tick task and one pending animation frame.

    All methods are synchronous and must be called from the event loop thread,
    so cancel-and-rearm happens between two callbacks and no tick ever runs on
    a stale interval.
    """

    def __init__(self, frame_ms: int = FRAME_MS):
        self.frame_ms = frame_ms
        self.interval_ms: Optional[int] = None
        self._tick_task: Optional[asyncio.Task] = None
        self._frame_handle: Optional[asyncio.TimerHandle] = None

    @property
    def running(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    def reschedule(self, interval_ms: int, callback: Callable[[], None]):
        self.cancel()
        self.interval_ms = interval_ms
        self._tick_task = asyncio.get_running_loop().create_task(self._repeat(interval_ms, callback))
        self._tick_task.add_done_callback(_log_failure)
        logger.debug("Tick interval set to %d ms", interval_ms)

    def cancel(self):
        if self._tick_task is not None:
            self._tick_task.cancel()
            self._tick_task = None
        self.interval_ms = None

    async def _repeat(self, interval_ms: int, callback: Callable[[], None]):
        while True:
            await asyncio.sleep(interval_ms / 1000)
            callback()

    def request_frame(self, callback: Callable[[], None]):
        self.cancel_frame()
        self._frame_handle = asyncio.get_running_loop().call_later(
            self.frame_ms / 1000, self._run_frame, callback
        )

    def _run_frame(self, callback: Callable[[], None]):
        self._frame_handle = None
        callback()

    def cancel_frame(self):
        if self._frame_handle is not None:
            self._frame_handle.cancel()
            self._frame_handle = None
