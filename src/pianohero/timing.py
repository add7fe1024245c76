"""Frame clock — turns wall-clock ticks into clamped frame deltas."""

from __future__ import annotations

from typing import Callable

import pygame

from pianohero.config import MAX_FRAME_MS, REFERENCE_FRAME_MS


def clamp_frame_delta(delta_ms: float, ceiling_ms: float = MAX_FRAME_MS) -> float:
    """Replace a stall longer than ``ceiling_ms`` by one reference frame.

    Without this a note could jump straight past the hit window after the
    window lost focus.
    """
    if delta_ms < 0:
        return 0.0
    if delta_ms > ceiling_ms:
        return REFERENCE_FRAME_MS
    return delta_ms


class FrameClock:
    """Measures elapsed milliseconds between frames."""

    def __init__(self, time_source: Callable[[], float] = pygame.time.get_ticks) -> None:
        self._now = time_source
        self._last: float | None = None

    def reset(self) -> None:
        """Forget the previous frame, e.g. on resume, so no paused time leaks in."""
        self._last = None

    def tick(self) -> float:
        now = self._now()
        if self._last is None:
            self._last = now
            return 0.0
        delta = now - self._last
        self._last = now
        return clamp_frame_delta(delta)
