import os
import random
import tempfile

import pytest

# snakeio.main opens its store at import time
os.environ.setdefault(
    "SNAKEIO_HIGH_SCORE_PATH",
    os.path.join(tempfile.mkdtemp(prefix="snakeio-"), "high_score.json"),
)

from snakeio.audio import AudioCues  # noqa: E402
from snakeio.controller import GameController  # noqa: E402
from snakeio.game import GameState  # noqa: E402
from snakeio.storage import HighScoreStore  # noqa: E402


class FakeScheduler:
    def __init__(self):
        self.interval_ms = None
        self.callback = None
        self.frame = None
        self.history = []

    def reschedule(self, interval_ms, callback):
        self.interval_ms = interval_ms
        self.callback = callback
        self.history.append(interval_ms)

    def cancel(self):
        self.interval_ms = None
        self.callback = None

    def request_frame(self, callback):
        self.frame = callback

    def cancel_frame(self):
        self.frame = None


class RecordingRenderer:
    def __init__(self):
        self.frames = []

    def draw(self, snapshot):
        self.frames.append(snapshot)

    @property
    def last(self):
        return self.frames[-1]


@pytest.fixture
def game():
    return GameState(rng=random.Random(1234))


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def cues():
    return []


@pytest.fixture
def store(tmp_path):
    s = HighScoreStore(str(tmp_path / "high_score.json"))
    s.load()
    return s


@pytest.fixture
def controller(game, scheduler, renderer, cues, store):
    return GameController(game, scheduler, renderer, audio=AudioCues(lambda: cues.append), store=store)
