"""Tests for the background melody loop."""

from pianohero.melody import MelodyLoop


def test_disabled_loop_is_silent():
    loop = MelodyLoop(["C", "D"], step_ms=100)
    assert loop.update(1000) == []


def test_steps_at_fixed_interval_and_wraps():
    loop = MelodyLoop(["C", "D", "E"], step_ms=100)
    loop.enabled = True
    assert loop.update(99) == []
    assert loop.update(1) == ["C"]
    assert loop.update(250) == ["D", "E"]
    assert loop.update(50) == ["C"]


def test_reset_restarts_from_first_note():
    loop = MelodyLoop(["C", "D"], step_ms=100)
    loop.enabled = True
    loop.update(100)
    loop.reset()
    assert loop.update(100) == ["C"]
