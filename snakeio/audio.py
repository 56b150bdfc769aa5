"""Sound effect cues.

Synthesis happens in the client; the server only decides which cue fires.
"""

import logging
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Cue(Enum):
    EAT_SMALL = "eat-small"
    EAT_LARGE = "eat-large"
    BOMB = "bomb"
    GAME_OVER = "game-over"
    PAUSE = "pause"
    NEW_BEST = "new-best"
    START = "start"
    TUNE = "tune"


class AudioCues:
    """Fire-and-forget cue dispatch with a mute flag.

    ``sink_factory`` builds the callable that actually delivers a cue. It is
    created on first use; if creating or calling it fails, audio turns itself
    off for the rest of the session and gameplay is unaffected.
    """

    def __init__(self, sink_factory: Optional[Callable[[], Callable[[Cue], None]]] = None,
                 muted: bool = False):
        self._sink_factory = sink_factory
        self._sink: Optional[Callable[[Cue], None]] = None
        self.muted = muted
        self.broken = False

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        return self.muted

    def _ensure(self) -> Optional[Callable[[Cue], None]]:
        if self._sink is None and self._sink_factory is not None and not self.broken:
            try:
                self._sink = self._sink_factory()
            except Exception:
                logger.debug("Audio unavailable", exc_info=True)
                self.broken = True
        return self._sink

    def play(self, cue: Cue):
        if self.muted or self.broken:
            return
        sink = self._ensure()
        if sink is None:
            return
        try:
            sink(cue)
        except Exception:
            logger.debug("Audio cue %s failed, disabling audio", cue.value, exc_info=True)
            self.broken = True
