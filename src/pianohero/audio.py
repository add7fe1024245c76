"""Sound cues via FluidSynth + SoundFonts."""

from __future__ import annotations

import sys
import time
from pathlib import Path

import fluidsynth

# MIDI pitches of the lane symbols in octave 4 (C4 = 60)
SYMBOL_PITCH = {"C": 60, "D": 62, "E": 64, "F": 65, "G": 67, "A": 69, "B": 71}

_BONUS_ARPEGGIO = ((72, 0.00), (76, 0.04), (79, 0.08))  # C5 E5 G5, start offsets in s
_MISS_PITCHES = (45, 46)  # A2 against B-flat2
_CUE_CHANNEL = 0
_MELODY_CHANNEL = 1


def _detect_audio_driver() -> str:
    """Auto-detect the appropriate FluidSynth audio driver for the platform."""
    if sys.platform == "linux":
        return "pulseaudio"
    elif sys.platform == "darwin":
        return "coreaudio"
    elif sys.platform == "win32":
        return "dsound"
    return "alsa"


class AudioEngine:
    """Plays the engine's hit, bonus and miss cues on a FluidSynth synth."""

    def __init__(self, soundfont_path: str | Path | None = None) -> None:
        self.fs = fluidsynth.Synth(gain=0.8)
        self.fs.start(driver=_detect_audio_driver())
        self._sfid: int | None = None
        self.muted = False
        # (time, pitch, velocity or 0 for note-off, channel)
        self._scheduled: list[tuple[float, int, int, int]] = []
        if soundfont_path:
            self.load_soundfont(soundfont_path)

    def load_soundfont(self, path: str | Path) -> None:
        self._sfid = self.fs.sfload(str(path))
        self.fs.program_select(_CUE_CHANNEL, self._sfid, 0, 0)
        self.fs.program_select(_MELODY_CHANNEL, self._sfid, 0, 0)

    def play_tone(self, pitch: int, duration: float, velocity: int = 90,
                  channel: int = _CUE_CHANNEL, delay: float = 0.0) -> None:
        if self.muted:
            return
        now = time.time()
        if delay > 0:
            self._scheduled.append((now + delay, pitch, velocity, channel))
        else:
            self.fs.noteon(channel, pitch, velocity)
        self._scheduled.append((now + delay + duration, pitch, 0, channel))

    def play_hit(self, symbol: str) -> None:
        pitch = SYMBOL_PITCH.get(symbol)
        if pitch is not None:
            self.play_tone(pitch, 0.1, velocity=100)

    def play_bonus(self) -> None:
        for pitch, offset in _BONUS_ARPEGGIO:
            self.play_tone(pitch, 0.1, velocity=90, delay=offset)

    def play_miss(self) -> None:
        for pitch in _MISS_PITCHES:
            self.play_tone(pitch, 0.2, velocity=70)

    def play_melody_note(self, symbol: str) -> None:
        pitch = SYMBOL_PITCH.get(symbol)
        if pitch is not None:
            self.play_tone(pitch, 0.3, velocity=35, channel=_MELODY_CHANNEL)

    def flush_scheduled(self) -> None:
        """Call each frame to send note-ons and note-offs whose time has come."""
        now = time.time()
        remaining: list[tuple[float, int, int, int]] = []
        for when, pitch, velocity, channel in self._scheduled:
            if now < when:
                remaining.append((when, pitch, velocity, channel))
            elif velocity > 0:
                self.fs.noteon(channel, pitch, velocity)
            else:
                self.fs.noteoff(channel, pitch)
        self._scheduled = remaining

    def set_muted(self, muted: bool) -> None:
        self.muted = muted
        if muted:
            self.all_notes_off()

    def toggle_mute(self) -> bool:
        self.set_muted(not self.muted)
        return self.muted

    def stop_melody(self) -> None:
        """Silence the background melody. Cues on the cue channel keep ringing."""
        for pitch in range(128):
            self.fs.noteoff(_MELODY_CHANNEL, pitch)
        self._scheduled = [entry for entry in self._scheduled if entry[3] != _MELODY_CHANNEL]

    def all_notes_off(self) -> None:
        for ch in (_CUE_CHANNEL, _MELODY_CHANNEL):
            for pitch in range(128):
                self.fs.noteoff(ch, pitch)
        self._scheduled.clear()

    def shutdown(self) -> None:
        self.all_notes_off()
        self.fs.delete()
