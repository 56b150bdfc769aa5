"""Mode state machine: keys in, ticks and frames driven, renderer and audio fed."""

import logging
from typing import Optional, Protocol

from .audio import AudioCues, Cue
from .constants import FOOD_SPEED_FACTOR_STEP, REASON_BOMB
from .game import GameState
from .models import Mode, Snapshot
from .storage import HighScoreStore

logger = logging.getLogger(__name__)

KEY_DIRECTIONS = {
    "arrowup": "up", "w": "up",
    "arrowdown": "down", "s": "down",
    "arrowleft": "left", "a": "left",
    "arrowright": "right", "d": "right",
}
KEY_SPEEDS = {"1": "slow", "2": "medium", "3": "fast"}
SPACE_KEYS = {" ", "space", "spacebar"}
ENTER_KEYS = {"enter", "return"}


class Renderer(Protocol):
    def draw(self, snapshot: Snapshot) -> None: ...


class GameController:
    def __init__(self, game: GameState, scheduler, renderer: Renderer,
                 audio: Optional[AudioCues] = None, store: Optional[HighScoreStore] = None):
        self.game = game
        self.scheduler = scheduler
        self.renderer = renderer
        self.audio = audio or AudioCues()
        self.store = store
        if store is not None:
            game.high_score = max(game.high_score, store.value)

    @property
    def mode(self) -> Mode:
        return self.game.mode

    def draw(self):
        self.renderer.draw(self.game.snapshot(muted=self.audio.muted))

    # ---- input ----

    def handle_key(self, key: str):
        if not isinstance(key, str) or not key:
            return
        k = key.lower()

        if k == "[":
            self.adjust_food_speed(FOOD_SPEED_FACTOR_STEP)
            return
        if k == "]":
            self.adjust_food_speed(-FOOD_SPEED_FACTOR_STEP)
            return

        mode = self.game.mode
        if mode == Mode.TITLE:
            if k in KEY_SPEEDS:
                self.game.set_speed_preset(KEY_SPEEDS[k])
                self.audio.play(Cue.TUNE)
                self.draw()
            elif k == "m":
                self.toggle_mute()
            else:
                self.start_game()

        elif mode == Mode.EXPLODING:
            if k == "m":
                self.toggle_mute()

        elif mode == Mode.GAMEOVER:
            if k == "m":
                self.toggle_mute()
            elif k in ENTER_KEYS or k in SPACE_KEYS:
                self.start_game()

        elif mode == Mode.PAUSED:
            if k == "m":
                self.toggle_mute()
            elif k in KEY_SPEEDS:
                self.apply_speed(KEY_SPEEDS[k])
            elif k in ENTER_KEYS:
                self.start_game()
            elif k in SPACE_KEYS:
                self.resume()

        elif mode == Mode.PLAYING:
            if k in KEY_DIRECTIONS:
                self.game.queue_direction(KEY_DIRECTIONS[k])
            elif k in SPACE_KEYS:
                self.pause()
            elif k in KEY_SPEEDS:
                self.apply_speed(KEY_SPEEDS[k])
            elif k == "m":
                self.toggle_mute()

    # ---- transitions ----

    def start_game(self):
        self.scheduler.cancel_frame()
        self.game.start()
        self.scheduler.reschedule(self.game.tick_ms, self.on_tick)
        self.audio.play(Cue.START)
        self.draw()

    def pause(self):
        if self.game.mode != Mode.PLAYING:
            return
        self.scheduler.cancel()
        self.game.mode = Mode.PAUSED
        self.audio.play(Cue.PAUSE)
        self.draw()

    def resume(self):
        if self.game.mode != Mode.PAUSED:
            return
        self.scheduler.reschedule(self.game.tick_ms, self.on_tick)
        self.game.mode = Mode.PLAYING
        self.audio.play(Cue.PAUSE)
        self.draw()

    def apply_speed(self, preset: str):
        self.game.set_speed_preset(preset)
        logger.info("Speed preset %s (%d ms)", preset, self.game.tick_ms)
        if self.game.mode == Mode.PLAYING:
            self.scheduler.reschedule(self.game.tick_ms, self.on_tick)
        self.draw()

    def adjust_food_speed(self, delta: float):
        factor = self.game.adjust_food_speed(delta)
        logger.debug("Food wander factor %.1fx", factor)
        self.audio.play(Cue.TUNE)
        if self.game.mode in (Mode.PAUSED, Mode.TITLE):
            self.draw()

    def toggle_mute(self):
        muted = self.audio.toggle_mute()
        logger.debug("Audio %s", "muted" if muted else "unmuted")
        # explosion frames are drawn only by on_frame
        if self.game.mode != Mode.EXPLODING:
            self.draw()

    # ---- timers ----

    def on_tick(self):
        if self.game.mode != Mode.PLAYING:
            return
        events = self.game.tick()

        if events.died:
            self.scheduler.cancel()
            self.audio.play(Cue.GAME_OVER)
            self.draw()
            return

        if events.exploded:
            self.scheduler.cancel()
            self.audio.play(Cue.BOMB)
            self.scheduler.request_frame(self.on_frame)
            return

        if events.eaten is not None:
            self.audio.play(Cue.EAT_LARGE if events.eaten.points >= 5 else Cue.EAT_SMALL)
            if events.new_best:
                if self.store is not None:
                    self.store.save(self.game.high_score)
                logger.info("New high score %d", self.game.high_score)
                self.audio.play(Cue.NEW_BEST)
            if events.sped_up:
                logger.info("Speeding up to %d ms", self.game.tick_ms)
                self.scheduler.reschedule(self.game.tick_ms, self.on_tick)

        self.draw()

    def on_frame(self):
        if self.game.mode != Mode.EXPLODING:
            return
        self.draw()
        if self.game.step_explosion():
            self.scheduler.request_frame(self.on_frame)
        else:
            self.game.set_game_over(REASON_BOMB)
            self.draw()
