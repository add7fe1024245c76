"""Tests for spawning, advancing and judging in the rhythm engine."""

import pytest

from pianohero.config import (
    BONUS_POINTS,
    HIT_LINE_Y,
    HIT_POINTS,
    INITIAL_LIVES,
    LEVEL_UP_DISPLAY_MS,
    REFERENCE_FRAME_MS,
)
from pianohero.engine import RhythmEngine
from pianohero.models import EffectKind, Judgement
from pianohero.note import Note


@pytest.fixture
def engine(cues, two_levels, rng):
    return RhythmEngine(cues=cues, levels=two_levels, rng=rng)


def test_spawns_on_interval_and_drops_overshoot(engine):
    engine.advance(1299)
    assert engine.active_notes == []
    engine.advance(200)
    assert len(engine.active_notes) == 1
    assert engine.time_since_last_spawn == 0.0


def test_passive_miss_costs_no_life(engine, cues):
    engine.spawn_note(Note("E", y=479))
    engine.advance(2 * REFERENCE_FRAME_MS)

    assert engine.active_notes == []
    assert engine.lives == INITIAL_LIVES
    assert engine.missed_notes == 1
    assert cues.calls == [("miss",)]
    assert [(e.kind, e.lane) for e in engine.effects] == [(EffectKind.MISS, 2)]


def test_hit_note_removed_after_animation_without_miss(engine, cues):
    engine.spawn_note(Note("C", y=HIT_LINE_Y))
    engine.judge("C")
    engine.advance(150)
    assert len(engine.active_notes) == 1
    engine.advance(100)
    assert engine.active_notes == []
    assert ("miss",) not in cues.calls


def test_hit_scores_and_plays_pitched_cue(engine, cues):
    engine.spawn_note(Note("G", y=HIT_LINE_Y))
    scores = []
    engine.on_score_change = scores.append

    assert engine.judge("G") is Judgement.HIT
    assert engine.score == HIT_POINTS
    assert scores == [HIT_POINTS]
    assert cues.calls == [("hit", "G")]
    assert [(e.kind, e.lane) for e in engine.effects] == [(EffectKind.HIT, 4)]


def test_bonus_hit(engine, cues):
    engine.spawn_note(Note("A", is_bonus=True, y=HIT_LINE_Y))
    assert engine.judge("A") is Judgement.BONUS
    assert engine.score == BONUS_POINTS
    assert cues.calls == [("bonus",)]


def test_oldest_hittable_note_wins(engine):
    older = engine.spawn_note(Note("D", y=HIT_LINE_Y + 10))
    newer = engine.spawn_note(Note("D", y=HIT_LINE_Y - 10))
    engine.judge("D")
    assert older.hit
    assert not newer.hit


def test_note_outside_window_is_skipped(engine):
    far = engine.spawn_note(Note("F", y=0))
    near = engine.spawn_note(Note("F", y=HIT_LINE_Y))
    engine.judge("F")
    assert not far.hit
    assert near.hit


def test_miss_press_costs_one_life(engine, cues):
    engine.spawn_note(Note("C", y=0))  # same symbol, not yet in the window
    lives = []
    engine.on_lives_change = lives.append

    assert engine.judge("C") is Judgement.MISS
    assert engine.lives == INITIAL_LIVES - 1
    assert engine.score == 0
    assert lives == [INITIAL_LIVES - 1]
    assert cues.calls == [("miss",)]


def test_miss_press_flashes_the_symbol_lane(engine):
    engine.judge("B")
    assert [(e.kind, e.lane) for e in engine.effects] == [(EffectKind.MISS, 6)]


def test_unknown_symbol_is_ignored(engine, cues):
    assert engine.judge("X") is None
    assert engine.lives == INITIAL_LIVES
    assert cues.calls == []


def test_lives_depleted_hook(engine):
    depleted = []
    engine.on_lives_depleted = lambda: depleted.append(True)
    for _ in range(INITIAL_LIVES):
        engine.judge("C")
    assert engine.lives == 0
    assert depleted == [True]


def test_effects_expire(engine):
    engine.spawn_note(Note("C", y=HIT_LINE_Y))
    engine.judge("C")
    engine.advance(99)
    assert len(engine.effects) == 1
    engine.advance(1)
    assert engine.effects == []


def test_level_up_banner_expires(engine):
    for _ in range(15):
        engine.spawn_note(Note("C", y=HIT_LINE_Y))
        engine.judge("C")
    assert engine.level_up_display_ms == LEVEL_UP_DISPLAY_MS
    engine.advance(LEVEL_UP_DISPLAY_MS)
    assert engine.level_up_display_ms is None


def test_level_up_is_idempotent_at_last_level(engine):
    engine.reset(1)
    levels = []
    engine.on_level_change = levels.append

    for _ in range(40):
        engine.spawn_note(Note("C", y=HIT_LINE_Y))
        engine.judge("C")

    assert engine.score == 4000
    assert engine.current_level == 1
    assert engine.level_up_display_ms is None
    assert engine.last_level_up_score == 3000
    assert levels == []


def test_reset_clears_session(engine):
    engine.spawn_note(Note("C", y=HIT_LINE_Y))
    engine.judge("C")
    engine.judge("D")
    engine.reset(0)
    assert engine.score == 0
    assert engine.lives == INITIAL_LIVES
    assert engine.active_notes == []
    assert engine.effects == []
    assert engine.stats().hits == 0
