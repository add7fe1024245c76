"""Input capture — computer keyboard and MIDI keyboards mapped to note symbols."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import pygame

try:
    import rtmidi
    _HAS_RTMIDI = True
except ImportError:
    _HAS_RTMIDI = False

logger = logging.getLogger(__name__)


@dataclass
class KeyPress:
    symbol: str
    timestamp: float


class MidiDeviceError(Exception):
    """Raised when no MIDI device is found or connection fails."""


@runtime_checkable
class InputSource(Protocol):
    """Common interface for keyboard and MIDI input sources."""
    def poll(self) -> KeyPress | None: ...
    def close(self) -> None: ...


# Home row and top row both cover the seven lanes.
_HOME_ROW = {
    pygame.K_a: "C", pygame.K_s: "D", pygame.K_d: "E", pygame.K_f: "F",
    pygame.K_g: "G", pygame.K_h: "A", pygame.K_j: "B",
}
_TOP_ROW = {
    pygame.K_q: "C", pygame.K_w: "D", pygame.K_e: "E", pygame.K_r: "F",
    pygame.K_t: "G", pygame.K_y: "A", pygame.K_u: "B",
}
_KEY_TO_SYMBOL: dict[int, str] = {**_HOME_ROW, **_TOP_ROW}

# Pitch class -> symbol for the natural notes; sharps and flats have no lane.
_PITCH_CLASS_TO_SYMBOL = {0: "C", 2: "D", 4: "E", 5: "F", 7: "G", 9: "A", 11: "B"}


def key_to_symbol(key: int) -> str | None:
    return _KEY_TO_SYMBOL.get(key)


def pitch_to_symbol(pitch: int) -> str | None:
    return _PITCH_CLASS_TO_SYMBOL.get(pitch % 12)


def symbol_keys(symbol: str) -> list[str]:
    """Key labels bound to a symbol, for on-screen hints."""
    return [pygame.key.name(k).upper() for k, s in _KEY_TO_SYMBOL.items() if s == symbol]


class KeyboardInput:
    """Computer keyboard mapped to the seven lanes."""

    def __init__(self) -> None:
        self._events: list[KeyPress] = []
        self._held: set[str] = set()

    def feed_event(self, event: pygame.event.Event) -> None:
        """Call from the game loop for each pygame event."""
        if event.type == pygame.KEYDOWN and event.key in _KEY_TO_SYMBOL:
            symbol = _KEY_TO_SYMBOL[event.key]
            # Key repeat and the second row must not produce a second press.
            if symbol not in self._held:
                self._held.add(symbol)
                self._events.append(KeyPress(symbol=symbol, timestamp=time.time()))
        elif event.type == pygame.KEYUP and event.key in _KEY_TO_SYMBOL:
            self._held.discard(_KEY_TO_SYMBOL[event.key])

    @property
    def held(self) -> frozenset[str]:
        return frozenset(self._held)

    def poll(self) -> KeyPress | None:
        if self._events:
            return self._events.pop(0)
        return None

    def close(self) -> None:
        self._events.clear()
        self._held.clear()


class MidiInput:
    def __init__(self, port_index: int | None = None) -> None:
        if not _HAS_RTMIDI:
            raise MidiDeviceError("python-rtmidi is not installed")
        self.midi_in = rtmidi.MidiIn()
        self._port_index = port_index
        self._open = False
        self._held: set[str] = set()

    @staticmethod
    def list_ports() -> list[str]:
        if not _HAS_RTMIDI:
            return []
        midi_in = rtmidi.MidiIn()
        return midi_in.get_ports()

    def open(self) -> None:
        ports = self.midi_in.get_ports()
        if not ports:
            raise MidiDeviceError("No MIDI input devices found")
        idx = self._port_index if self._port_index is not None else 0
        self.midi_in.open_port(idx)
        self._open = True
        logger.info("Listening on MIDI port %s", ports[idx])

    @property
    def held(self) -> frozenset[str]:
        return frozenset(self._held)

    def poll(self) -> KeyPress | None:
        """Non-blocking poll. Returns the next note-on with a lane, or None."""
        if not self._open:
            return None
        while (msg := self.midi_in.get_message()) is not None:
            press = self._decode(msg[0])
            if press is not None:
                return press
        return None

    def _decode(self, data: list[int]) -> KeyPress | None:
        if len(data) < 3:
            return None
        status = data[0] & 0xF0
        symbol = pitch_to_symbol(data[1])
        if symbol is None:
            return None
        if status == 0x90 and data[2] > 0:
            if symbol in self._held:
                return None
            self._held.add(symbol)
            return KeyPress(symbol=symbol, timestamp=time.time())
        if status == 0x80 or (status == 0x90 and data[2] == 0):
            self._held.discard(symbol)
        return None

    def close(self) -> None:
        if self._open:
            self.midi_in.close_port()
            self._open = False
        self._held.clear()

