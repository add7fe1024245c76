"""A single falling note and its hit window."""

from __future__ import annotations

import math
import random

from pianohero.config import (
    BONUS_CHANCE,
    HIT_ANIMATION_MS,
    HIT_LINE_Y,
    HIT_TOLERANCE,
    NOTE_HEIGHT,
    NOTE_PADDING,
    PLAYFIELD_HEIGHT,
    REFERENCE_FRAME_MS,
    WINDOW_WIDTH,
)
from pianohero.models import SYMBOLS, NoteRenderData, lane_index


def is_in_hit_zone(
    note_y: float,
    note_height: float = NOTE_HEIGHT,
    hit_line_y: float = HIT_LINE_Y,
    tolerance: float = HIT_TOLERANCE,
) -> bool:
    """True if a note's vertical span overlaps the hit window.

    The window reaches ``tolerance`` above the hit line and a full note height
    plus ``tolerance`` below it, so slightly early and slightly late presses
    both count.
    """
    zone_top = hit_line_y - tolerance
    zone_bottom = hit_line_y + tolerance + note_height
    return note_y + note_height >= zone_top and note_y <= zone_bottom


class Note:
    """A note falling down its lane toward the hit line."""

    def __init__(self, symbol: str, is_bonus: bool = False, y: float | None = None) -> None:
        lane = lane_index(symbol)
        if lane < 0:
            raise ValueError(f"unknown note symbol {symbol!r}")
        self.symbol = symbol
        self.lane = lane
        self.is_bonus = is_bonus
        self.hit = False
        self.missed = False
        self.y: float = -NOTE_HEIGHT if y is None else y

        lane_width = WINDOW_WIDTH / len(SYMBOLS)
        self.x = lane * lane_width + NOTE_PADDING
        self.width = lane_width - NOTE_PADDING * 2
        self.height = NOTE_HEIGHT

        self.pulse_phase = 0.0
        self.hit_anim_ms = 0.0

    def __repr__(self) -> str:
        flags = "hit" if self.hit else "missed" if self.missed else "live"
        return f"Note({self.symbol!r}, y={self.y:.1f}, bonus={self.is_bonus}, {flags})"

    def update(self, speed: float, delta_ms: float) -> bool:
        """Advance by ``delta_ms``. Returns False once the note is below the playfield."""
        self.y += speed * (delta_ms / REFERENCE_FRAME_MS)

        if self.is_bonus and not self.hit:
            self.pulse_phase += delta_ms * 0.01
        if self.hit:
            self.hit_anim_ms += delta_ms

        if self.y > PLAYFIELD_HEIGHT:
            if not self.hit:
                self.missed = True
            return False
        return True

    def can_be_hit(self) -> bool:
        if self.hit or self.missed:
            return False
        return is_in_hit_zone(self.y, self.height)

    def mark_as_hit(self) -> None:
        self.hit = True
        self.hit_anim_ms = 0.0

    def is_hit_animation_complete(self) -> bool:
        return self.hit and self.hit_anim_ms > HIT_ANIMATION_MS

    def render_data(self) -> NoteRenderData:
        scale = 1.0
        if self.is_bonus and not self.hit:
            scale = 1.0 + math.sin(self.pulse_phase) * 0.1
        alpha = 1.0
        if self.hit:
            alpha = max(0.0, 1.0 - self.hit_anim_ms / HIT_ANIMATION_MS)
        return NoteRenderData(
            x=self.x,
            y=self.y,
            width=self.width * scale,
            height=self.height * scale,
            symbol=self.symbol,
            lane=self.lane,
            is_bonus=self.is_bonus,
            hit=self.hit,
            missed=self.missed,
            alpha=alpha,
            scale=scale,
        )

    @classmethod
    def create_random(
        cls,
        bonus_chance: float = BONUS_CHANCE,
        rng: random.Random | None = None,
    ) -> Note:
        """Create a note with a uniformly drawn symbol."""
        source = rng if rng is not None else random
        symbol = source.choice(SYMBOLS)
        return cls(symbol, is_bonus=source.random() < bonus_chance)
