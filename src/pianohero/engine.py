"""Rhythm engine — spawns and advances notes, judges key presses, keeps score."""

from __future__ import annotations

import logging
import random
from typing import Callable, Protocol, runtime_checkable

from pianohero.config import (
    BONUS_CHANCE,
    BONUS_POINTS,
    HIT_EFFECT_MS,
    HIT_POINTS,
    INITIAL_LIVES,
    LEVEL_UP_DISPLAY_MS,
    LEVEL_UP_THRESHOLD,
    MISS_EFFECT_MS,
)
from pianohero.levels import LevelSpec, LevelTable
from pianohero.models import (
    EffectKind,
    Judgement,
    NoteRenderData,
    SessionStats,
    TimedEffect,
    lane_index,
)
from pianohero.note import Note

logger = logging.getLogger(__name__)


@runtime_checkable
class CueSink(Protocol):
    """Receives fire-and-forget sound cues from the engine."""

    def play_hit(self, symbol: str) -> None: ...
    def play_bonus(self) -> None: ...
    def play_miss(self) -> None: ...


class NullCues:
    """Cue sink that plays nothing."""

    def play_hit(self, symbol: str) -> None:
        pass

    def play_bonus(self) -> None:
        pass

    def play_miss(self) -> None:
        pass


class RhythmEngine:
    """Owns the notes, score, lives and level of one play session.

    The engine knows nothing about game states; ``GameStateMachine`` decides
    when ``advance`` and ``judge`` may run.
    """

    def __init__(
        self,
        cues: CueSink | None = None,
        levels: LevelTable | None = None,
        bonus_chance: float = BONUS_CHANCE,
        rng: random.Random | None = None,
    ) -> None:
        self.cues: CueSink = cues if cues is not None else NullCues()
        self.levels = levels if levels is not None else LevelTable()
        self.bonus_chance = bonus_chance
        self._rng = rng if rng is not None else random.Random()

        self.on_score_change: Callable[[int], None] | None = None
        self.on_lives_change: Callable[[int], None] | None = None
        self.on_level_change: Callable[[int], None] | None = None
        self.on_lives_depleted: Callable[[], None] | None = None

        self.reset(0)

    def reset(self, level: int) -> None:
        """Start a fresh session at ``level`` (clamped)."""
        self.active_notes: list[Note] = []
        self.effects: list[TimedEffect] = []
        self.score = 0
        self.lives = INITIAL_LIVES
        self.current_level = self.levels.clamp(level)
        self.starting_level = self.current_level
        self.time_since_last_spawn = 0.0
        self.last_level_up_score = 0
        self.level_up_display_ms: float | None = None
        self.elapsed_ms = 0.0

        self.hits = 0
        self.bonus_hits = 0
        self.wrong_presses = 0
        self.missed_notes = 0

    @property
    def level_spec(self) -> LevelSpec:
        return self.levels[self.current_level]

    # ------------------------------------------------------------------
    # Frame update
    # ------------------------------------------------------------------

    def advance(self, delta_ms: float) -> None:
        """Run one frame: spawn, move notes, count effects down."""
        self.elapsed_ms += delta_ms
        self._spawn_step(delta_ms)
        self._advance_notes(delta_ms)
        self._update_effects(delta_ms)

    def spawn_note(self, note: Note | None = None) -> Note:
        """Append ``note`` (or a random one) to the active notes."""
        if note is None:
            note = Note.create_random(self.bonus_chance, self._rng)
        self.active_notes.append(note)
        return note

    def _spawn_step(self, delta_ms: float) -> None:
        self.time_since_last_spawn += delta_ms
        if self.time_since_last_spawn >= self.level_spec.spawn_interval_ms:
            self.spawn_note()
            # Overshoot is dropped: the cadence restarts from this frame.
            self.time_since_last_spawn = 0.0

    def _advance_notes(self, delta_ms: float) -> None:
        speed = self.level_spec.speed
        kept: list[Note] = []
        for note in self.active_notes:
            visible = note.update(speed, delta_ms)
            if visible and not note.is_hit_animation_complete():
                kept.append(note)
                continue
            if note.missed:
                # A note that falls through costs no life, only the points.
                self.missed_notes += 1
                self.cues.play_miss()
                self._add_effect(EffectKind.MISS, note.lane)
        self.active_notes = kept

    def _update_effects(self, delta_ms: float) -> None:
        for effect in self.effects:
            effect.remaining_ms -= delta_ms
        self.effects = [e for e in self.effects if e.remaining_ms > 0]

        if self.level_up_display_ms is not None:
            self.level_up_display_ms -= delta_ms
            if self.level_up_display_ms <= 0:
                self.level_up_display_ms = None

    def _add_effect(self, kind: EffectKind, lane: int) -> None:
        duration = HIT_EFFECT_MS if kind is EffectKind.HIT else MISS_EFFECT_MS
        self.effects.append(TimedEffect(kind=kind, lane=lane, remaining_ms=duration))

    # ------------------------------------------------------------------
    # Judgement
    # ------------------------------------------------------------------

    def judge(self, symbol: str) -> Judgement | None:
        """Judge a key press. Returns None when the symbol is not a lane."""
        lane = lane_index(symbol)
        if lane < 0:
            logger.debug("Ignoring unknown symbol %r", symbol)
            return None

        # Oldest hittable note of this symbol wins.
        for note in self.active_notes:
            if note.symbol == symbol and note.can_be_hit():
                return self._score_hit(note)

        self._lose_life(lane)
        return Judgement.MISS

    def _score_hit(self, note: Note) -> Judgement:
        note.mark_as_hit()
        if note.is_bonus:
            self.score += BONUS_POINTS
            self.bonus_hits += 1
            self.cues.play_bonus()
            judgement = Judgement.BONUS
        else:
            self.score += HIT_POINTS
            self.hits += 1
            self.cues.play_hit(note.symbol)
            judgement = Judgement.HIT

        self._add_effect(EffectKind.HIT, note.lane)
        self._check_level_up()
        _notify(self.on_score_change, self.score)
        return judgement

    def _lose_life(self, lane: int) -> None:
        self.lives = max(0, self.lives - 1)
        self.wrong_presses += 1
        self.cues.play_miss()
        self._add_effect(EffectKind.MISS, lane)
        _notify(self.on_lives_change, self.lives)
        if self.lives == 0 and self.on_lives_depleted is not None:
            self.on_lives_depleted()

    def _check_level_up(self) -> None:
        current = self.score // LEVEL_UP_THRESHOLD
        last = self.last_level_up_score // LEVEL_UP_THRESHOLD
        if current <= last:
            return

        self.last_level_up_score = self.score
        if self.current_level >= self.levels.last_index:
            return

        self.current_level += 1
        self.level_up_display_ms = LEVEL_UP_DISPLAY_MS
        logger.debug("Level up to %d (%s) at score %d",
                     self.current_level, self.level_spec.name, self.score)
        _notify(self.on_level_change, self.current_level)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def render_data(self) -> list[NoteRenderData]:
        return [note.render_data() for note in self.active_notes]

    def stats(self) -> SessionStats:
        return SessionStats(
            score=self.score,
            starting_level=self.starting_level,
            final_level=self.current_level,
            hits=self.hits,
            bonus_hits=self.bonus_hits,
            wrong_presses=self.wrong_presses,
            missed_notes=self.missed_notes,
            duration_ms=self.elapsed_ms,
        )


def _notify(callback: Callable[[int], None] | None, value: int) -> None:
    if callback is not None:
        callback(value)
