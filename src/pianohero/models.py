"""Core data models shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

# Ordered note symbols; the index of a symbol is its lane.
SYMBOLS: tuple[str, ...] = ("C", "D", "E", "F", "G", "A", "B")


def lane_index(symbol: str) -> int:
    """Return the lane for a symbol, or -1 if it is not a recognised symbol."""
    try:
        return SYMBOLS.index(symbol)
    except ValueError:
        return -1


class GameState(Enum):
    MENU = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


class Judgement(Enum):
    HIT = auto()
    BONUS = auto()
    MISS = auto()


class EffectKind(Enum):
    HIT = auto()
    MISS = auto()


@dataclass
class TimedEffect:
    """A lane flash that counts down and disappears at or below zero."""

    kind: EffectKind
    lane: int
    remaining_ms: float


@dataclass(frozen=True)
class NoteRenderData:
    x: float
    y: float
    width: float
    height: float
    symbol: str
    lane: int
    is_bonus: bool
    hit: bool
    missed: bool
    alpha: float = 1.0
    scale: float = 1.0


@dataclass(frozen=True)
class RenderSnapshot:
    """Everything a renderer needs to draw one frame."""

    state: GameState
    score: int
    best_score: int
    last_score: int
    lives: int
    max_lives: int
    level: int
    level_name: str
    elapsed_ms: float
    notes: tuple[NoteRenderData, ...] = ()
    effects: tuple[TimedEffect, ...] = ()
    level_up_active: bool = False
    new_best: bool = False


@dataclass
class SessionStats:
    """Outcome of one PLAYING session, recorded at game over."""

    score: int = 0
    starting_level: int = 0
    final_level: int = 0
    hits: int = 0
    bonus_hits: int = 0
    wrong_presses: int = 0
    missed_notes: int = 0
    duration_ms: float = 0.0
