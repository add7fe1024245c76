"""Per-level tuning: fall speed, spawn cadence, display name."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


class ConfigurationError(Exception):
    """Raised when the level table cannot drive a game."""


@dataclass(frozen=True)
class LevelSpec:
    speed: float  # pixels per reference frame
    spawn_interval_ms: int
    name: str


DEFAULT_LEVELS: tuple[LevelSpec, ...] = (
    LevelSpec(speed=0.8, spawn_interval_ms=1600, name="Beginner"),
    LevelSpec(speed=1.0, spawn_interval_ms=1300, name="Easy"),
    LevelSpec(speed=1.3, spawn_interval_ms=1000, name="Medium"),
    LevelSpec(speed=1.6, spawn_interval_ms=800, name="Hard"),
    LevelSpec(speed=2.0, spawn_interval_ms=600, name="Expert"),
    LevelSpec(speed=2.4, spawn_interval_ms=500, name="Master"),
    LevelSpec(speed=2.8, spawn_interval_ms=400, name="Legend"),
    LevelSpec(speed=3.2, spawn_interval_ms=350, name="Impossible"),
)


class LevelTable:
    """Immutable ordered list of levels; the index is the level number."""

    def __init__(self, levels: Iterable[LevelSpec] = DEFAULT_LEVELS) -> None:
        self._levels = tuple(levels)
        if not self._levels:
            raise ConfigurationError("level table is empty")
        for i, level in enumerate(self._levels):
            if level.speed <= 0 or level.spawn_interval_ms <= 0:
                raise ConfigurationError(
                    f"level {i} ({level.name!r}) needs a positive speed and spawn interval"
                )

    def __len__(self) -> int:
        return len(self._levels)

    def __getitem__(self, index: int) -> LevelSpec:
        return self._levels[index]

    def __iter__(self) -> Iterator[LevelSpec]:
        return iter(self._levels)

    @property
    def last_index(self) -> int:
        return len(self._levels) - 1

    def clamp(self, index: int) -> int:
        """Clamp an index into the valid range."""
        return max(0, min(index, self.last_index))
