"""Top-level application: initializes pygame, wires the game core, and runs the frame loop."""

from __future__ import annotations

import logging
import random
from pathlib import Path

import pygame

from pianohero.config import FPS, TOP_SCORES_SHOWN, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from pianohero.input import InputSource, KeyboardInput
from pianohero.melody import MelodyLoop
from pianohero.models import GameState
from pianohero.renderer.screens import ScreenRenderer
from pianohero.state import GameStateMachine
from pianohero.timing import FrameClock

logger = logging.getLogger(__name__)


def handle_control_key(game: GameStateMachine, key: int, audio=None) -> bool:
    """Apply a control key to ``game``. Returns False to quit.

    Lane keys never quit; only Esc on the menu (or closing the window) does.
    """
    state = game.state

    if key == pygame.K_m and audio is not None:
        audio.toggle_mute()
    elif state is GameState.MENU:
        if key in (pygame.K_RETURN, pygame.K_SPACE):
            game.start()
        elif key == pygame.K_UP:
            game.set_level(game.level + 1)
        elif key == pygame.K_DOWN:
            game.set_level(game.level - 1)
        elif key == pygame.K_ESCAPE:
            return False
    elif state in (GameState.PLAYING, GameState.PAUSED):
        if key in (pygame.K_ESCAPE, pygame.K_p, pygame.K_SPACE):
            game.toggle_pause()
        elif key == pygame.K_BACKSPACE:
            game.stop()
    elif state is GameState.GAME_OVER:
        if key in (pygame.K_RETURN, pygame.K_SPACE):
            game.start()
        elif key == pygame.K_ESCAPE:
            game.go_to_menu()
    return True


class App:
    def __init__(
        self,
        level: int = 0,
        db_path: str | Path | None = None,
        soundfont: str | Path | None = None,
        audio_enabled: bool = True,
        seed: int | None = None,
    ) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()
        self.frame_clock = FrameClock()

        # Optional subsystems degrade to None
        self.audio = self._try_audio(soundfont) if audio_enabled else None
        self.store = self._try_store(db_path)
        self._midi_input = self._try_midi()
        self._keyboard_input = KeyboardInput()

        inputs: list[InputSource] = [self._keyboard_input]
        if self._midi_input is not None:
            inputs.append(self._midi_input)

        self.game = GameStateMachine(
            cues=self.audio,
            inputs=inputs,
            store=self.store,
            rng=random.Random(seed),
        )
        self.game.set_level(level)
        self.game.on_state_change = self._on_state_change
        self._previous_state = self.game.state
        self.top_scores: list[dict] = []
        self._refresh_top_scores()

        self.melody = MelodyLoop()
        self.renderer = ScreenRenderer()

    def run(self) -> None:
        running = True
        while running:
            self.clock.tick(FPS)
            delta_ms = self.frame_clock.tick()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                else:
                    self._keyboard_input.feed_event(event)
                    if not self._handle_event(event):
                        running = False

            snapshot = self.game.tick(delta_ms)

            if self.audio is not None:
                if self.game.state is GameState.PLAYING:
                    for symbol in self.melody.update(delta_ms):
                        self.audio.play_melody_note(symbol)
                self.audio.flush_scheduled()

            self.renderer.draw(self.screen, snapshot, self._held_symbols(), self.top_scores)
            pygame.display.flip()

        self._cleanup()
        pygame.quit()

    def _held_symbols(self) -> frozenset[str]:
        held = self._keyboard_input.held
        if self._midi_input is not None:
            held |= self._midi_input.held
        return held

    def _handle_event(self, event: pygame.event.Event) -> bool:
        """Handle control keys. Returns False to quit."""
        if event.type != pygame.KEYDOWN:
            return True
        return handle_control_key(self.game, event.key, self.audio)

    def _on_state_change(self, state: GameState) -> None:
        if state is GameState.PLAYING:
            # Time spent outside PLAYING must not reach the next tick.
            self.frame_clock.reset()
            if self._previous_state is not GameState.PAUSED:
                self.melody.reset()
            self.melody.enabled = True
        else:
            self.melody.enabled = False
            # Cues already sounding (the final miss, a bonus arpeggio) ring out.
            if self.audio is not None:
                self.audio.stop_melody()
        if state in (GameState.MENU, GameState.GAME_OVER):
            self._refresh_top_scores()
        self._previous_state = state

    def _refresh_top_scores(self) -> None:
        self.top_scores = self.store.top_scores(TOP_SCORES_SHOWN) if self.store is not None else []

    def _cleanup(self) -> None:
        self._keyboard_input.close()
        if self._midi_input is not None:
            self._midi_input.close()
        if self.audio is not None:
            self.audio.shutdown()
        if self.store is not None:
            self.store.close()

    @staticmethod
    def _try_audio(soundfont: str | Path | None):
        try:
            from pianohero.audio import AudioEngine
            return AudioEngine(soundfont_path=soundfont)
        except Exception as exc:
            logger.warning("Audio disabled: %s", exc)
            return None

    @staticmethod
    def _try_midi():
        try:
            from pianohero.input import MidiInput
            mi = MidiInput()
            mi.open()
            return mi
        except Exception as exc:
            logger.info("No MIDI keyboard: %s", exc)
            return None

    @staticmethod
    def _try_store(db_path: str | Path | None):
        try:
            from pianohero.progress import DEFAULT_DB_PATH, ScoreStore
            return ScoreStore(db_path or DEFAULT_DB_PATH)
        except Exception as exc:
            logger.warning("Scores will not be saved: %s", exc)
            return None
