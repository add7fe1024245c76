"""Shared fakes for the game core tests."""

import random

import pytest

from pianohero.input import KeyPress
from pianohero.levels import LevelSpec, LevelTable


class RecordingCues:
    def __init__(self):
        self.calls = []

    def play_hit(self, symbol):
        self.calls.append(("hit", symbol))

    def play_bonus(self):
        self.calls.append(("bonus",))

    def play_miss(self):
        self.calls.append(("miss",))


class QueuedInput:
    def __init__(self, symbols=()):
        self.queue = [KeyPress(symbol=s, timestamp=0.0) for s in symbols]

    def poll(self):
        return self.queue.pop(0) if self.queue else None

    def close(self):
        self.queue.clear()


@pytest.fixture
def cues():
    return RecordingCues()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def two_levels():
    return LevelTable([
        LevelSpec(speed=1.0, spawn_interval_ms=1300, name="Easy"),
        LevelSpec(speed=1.3, spawn_interval_ms=1000, name="Medium"),
    ])
