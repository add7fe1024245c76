"""Background melody sequencing, independent of the synth that plays it."""

from __future__ import annotations

from collections.abc import Sequence

from pianohero.config import MELODY, MELODY_STEP_MS


class MelodyLoop:
    """Steps through a looping melody at a fixed interval, driven by frame deltas."""

    def __init__(self, melody: Sequence[str] = MELODY, step_ms: float = MELODY_STEP_MS) -> None:
        self.melody = tuple(melody)
        self.step_ms = step_ms
        self.enabled = False
        self._index = 0
        self._since_last_step = 0.0

    def update(self, delta_ms: float) -> list[str]:
        """Advance the loop. Returns the symbols due this frame, in order."""
        if not self.enabled or not self.melody:
            return []

        self._since_last_step += delta_ms
        due: list[str] = []
        while self._since_last_step >= self.step_ms:
            self._since_last_step -= self.step_ms
            due.append(self.melody[self._index])
            self._index = (self._index + 1) % len(self.melody)
        return due

    def reset(self) -> None:
        self._index = 0
        self._since_last_step = 0.0
