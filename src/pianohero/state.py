"""Game state machine — MENU, PLAYING, PAUSED, GAME_OVER around a RhythmEngine."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from dataclasses import replace
from typing import TYPE_CHECKING, Callable

from pianohero.config import MAX_LIVES
from pianohero.engine import CueSink, RhythmEngine
from pianohero.levels import LevelTable
from pianohero.models import GameState, Judgement, NoteRenderData, RenderSnapshot

if TYPE_CHECKING:
    from pianohero.input import InputSource
    from pianohero.progress import ScoreStore

logger = logging.getLogger(__name__)


class GameStateMachine:
    """Front door of the game core.

    A driver calls ``tick`` once per frame with a clamped delta and forwards
    key presses to ``on_key`` (or injects input sources that ``tick`` drains).
    Everything runs synchronously on the caller's thread.
    """

    def __init__(
        self,
        cues: CueSink | None = None,
        inputs: Iterable[InputSource] = (),
        levels: LevelTable | None = None,
        store: ScoreStore | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.engine = RhythmEngine(cues=cues, levels=levels, rng=rng)
        self.engine.on_lives_depleted = self._on_lives_depleted
        self._inputs: list[InputSource] = list(inputs)
        self._store = store
        self._state = GameState.MENU
        self.selected_level = 0
        self.best_score = store.best_score() if store is not None else 0
        self.last_score = 0
        self.on_state_change: Callable[[GameState], None] | None = None

    # ------------------------------------------------------------------
    # Callbacks forwarded to the engine
    # ------------------------------------------------------------------

    @property
    def on_score_change(self) -> Callable[[int], None] | None:
        return self.engine.on_score_change

    @on_score_change.setter
    def on_score_change(self, callback: Callable[[int], None] | None) -> None:
        self.engine.on_score_change = callback

    @property
    def on_lives_change(self) -> Callable[[int], None] | None:
        return self.engine.on_lives_change

    @on_lives_change.setter
    def on_lives_change(self, callback: Callable[[int], None] | None) -> None:
        self.engine.on_lives_change = callback

    @property
    def on_level_change(self) -> Callable[[int], None] | None:
        return self.engine.on_level_change

    @on_level_change.setter
    def on_level_change(self, callback: Callable[[int], None] | None) -> None:
        self.engine.on_level_change = callback

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def score(self) -> int:
        return self.engine.score

    @property
    def lives(self) -> int:
        return self.engine.lives

    @property
    def level(self) -> int:
        """The level in play, or the level selected for the next session in MENU."""
        if self._state is GameState.MENU:
            return self.selected_level
        return self.engine.current_level

    @property
    def is_new_best(self) -> bool:
        return self.last_score > 0 and self.last_score == self.best_score

    def active_notes_render_data(self) -> list[NoteRenderData]:
        return self.engine.render_data()

    def snapshot(self) -> RenderSnapshot:
        engine = self.engine
        level = self.level
        return RenderSnapshot(
            state=self._state,
            score=engine.score,
            best_score=self.best_score,
            last_score=self.last_score,
            lives=engine.lives,
            max_lives=MAX_LIVES,
            level=level,
            level_name=engine.levels[level].name,
            elapsed_ms=engine.elapsed_ms,
            notes=tuple(engine.render_data()),
            effects=tuple(replace(e) for e in engine.effects),
            level_up_active=engine.level_up_display_ms is not None,
            new_best=self.is_new_best,
        )

    # ------------------------------------------------------------------
    # Frame and input entry points
    # ------------------------------------------------------------------

    def add_input(self, source: InputSource) -> None:
        self._inputs.append(source)

    def tick(self, delta_ms: float) -> RenderSnapshot:
        """Advance one frame while PLAYING; otherwise only report the current state."""
        self._drain_inputs()
        if self._state is GameState.PLAYING:
            self.engine.advance(delta_ms)
        return self.snapshot()

    def on_key(self, symbol: str) -> Judgement | None:
        if self._state is not GameState.PLAYING:
            return None
        return self.engine.judge(symbol)

    def _drain_inputs(self) -> None:
        for source in self._inputs:
            while (press := source.poll()) is not None:
                self.on_key(press.symbol)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self, level_index: int | None = None) -> None:
        """Begin a fresh session. Restarting mid-game discards the running session."""
        if level_index is not None:
            self.selected_level = self.engine.levels.clamp(level_index)
        if self._state is GameState.PLAYING:
            logger.debug("Restarting session")
        self.engine.reset(self.selected_level)
        self._set_state(GameState.PLAYING)

    def pause(self) -> None:
        if self._state is GameState.PLAYING:
            self._set_state(GameState.PAUSED)

    def resume(self) -> None:
        if self._state is GameState.PAUSED:
            self._set_state(GameState.PLAYING)

    def toggle_pause(self) -> None:
        if self._state is GameState.PLAYING:
            self.pause()
        elif self._state is GameState.PAUSED:
            self.resume()

    def stop(self) -> None:
        """End the session, record its score and show GAME_OVER."""
        if self._state not in (GameState.PLAYING, GameState.PAUSED):
            return
        stats = self.engine.stats()
        self.last_score = stats.score
        if stats.score > self.best_score:
            self.best_score = stats.score
        if self._store is not None:
            self._store.save_session(stats)
        logger.info("Game over: score %d, level %d", stats.score, stats.final_level)
        self._set_state(GameState.GAME_OVER)

    def go_to_menu(self) -> None:
        if self._state in (GameState.PLAYING, GameState.PAUSED):
            self.stop()
        # The menu shows a fresh session: full lives, no notes.
        self.engine.reset(self.selected_level)
        self._set_state(GameState.MENU)

    def set_level(self, index: int) -> None:
        """Choose the level for the next session; ignored while PLAYING."""
        if self._state is GameState.PLAYING:
            return
        self.selected_level = self.engine.levels.clamp(index)

    def _on_lives_depleted(self) -> None:
        self.stop()

    def _set_state(self, state: GameState) -> None:
        if state is self._state:
            return
        logger.debug("State %s -> %s", self._state.name, state.name)
        self._state = state
        if self.on_state_change is not None:
            self.on_state_change(state)
