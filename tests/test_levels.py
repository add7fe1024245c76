"""Tests for the level table."""

import pytest

from pianohero.levels import DEFAULT_LEVELS, ConfigurationError, LevelSpec, LevelTable


def test_default_table():
    table = LevelTable()
    assert len(table) == 8
    assert table[1].speed == 1.0
    assert table[1].spawn_interval_ms == 1300
    assert table.last_index == 7


def test_clamp():
    table = LevelTable(DEFAULT_LEVELS[:3])
    assert table.clamp(-1) == 0
    assert table.clamp(1) == 1
    assert table.clamp(10) == 2


def test_invalid_level_rejected():
    with pytest.raises(ConfigurationError):
        LevelTable([LevelSpec(speed=0.0, spawn_interval_ms=1000, name="Frozen")])
