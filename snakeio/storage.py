"""High score persistence."""

import json
import logging
import os

from .constants import HS_KEY

logger = logging.getLogger(__name__)


class HighScoreStore:
    """A single key-value slot holding the high score as a string.

    Read and write failures leave the store running in memory for the rest of
    the session.
    """

    def __init__(self, path: str, key: str = HS_KEY):
        self.path = path
        self.key = key
        self.value = 0
        self.persistent = True

    def load(self) -> int:
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
            self.value = max(0, int(data.get(self.key, 0)))
        except FileNotFoundError:
            self.value = 0
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("Could not read high score from %s (%s); keeping it in memory", self.path, exc)
            self.persistent = False
            self.value = 0
        return self.value

    def save(self, score: int) -> int:
        if score <= self.value:
            return self.value
        self.value = score
        if not self.persistent:
            return self.value
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as fh:
                json.dump({self.key: str(score)}, fh)
        except OSError as exc:
            logger.warning("Could not write high score to %s (%s); keeping it in memory", self.path, exc)
            self.persistent = False
        return self.value
