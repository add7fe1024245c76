"""Tests for the driver's control keys and its reaction to state changes."""

import pygame
import pytest

from pianohero.app import App, handle_control_key
from pianohero.input import _KEY_TO_SYMBOL
from pianohero.melody import MelodyLoop
from pianohero.models import GameState
from pianohero.progress import ScoreStore
from pianohero.state import GameStateMachine
from pianohero.timing import FrameClock


class RecordingAudio:
    """Cue sink plus the driver-facing audio calls."""

    def __init__(self):
        self.calls = []

    def play_hit(self, symbol):
        self.calls.append("hit")

    def play_bonus(self):
        self.calls.append("bonus")

    def play_miss(self):
        self.calls.append("miss")

    def stop_melody(self):
        self.calls.append("stop_melody")

    def all_notes_off(self):
        self.calls.append("all_notes_off")

    def toggle_mute(self):
        self.calls.append("toggle_mute")


def _game_in(state, two_levels, rng):
    game = GameStateMachine(levels=two_levels, rng=rng)
    if state is not GameState.MENU:
        game.start()
    if state is GameState.PAUSED:
        game.pause()
    elif state is GameState.GAME_OVER:
        game.stop()
    assert game.state is state
    return game


def _bare_app(audio=None, store=None):
    """An App with its frame-loop collaborators but no window."""
    app = App.__new__(App)
    app.frame_clock = FrameClock(time_source=lambda: 0)
    app.melody = MelodyLoop()
    app.audio = audio
    app.store = store
    app.top_scores = []
    app._previous_state = GameState.MENU
    return app


@pytest.mark.parametrize("state", list(GameState))
def test_lane_keys_never_quit(state, two_levels, rng):
    for key in _KEY_TO_SYMBOL:
        game = _game_in(state, two_levels, rng)
        assert handle_control_key(game, key) is True


def test_lane_key_q_after_last_life_keeps_running(two_levels, rng):
    game = GameStateMachine(levels=two_levels, rng=rng)
    game.start()
    for _ in range(5):
        game.on_key("E")
    assert game.state is GameState.GAME_OVER

    assert handle_control_key(game, pygame.K_q) is True
    assert game.state is GameState.GAME_OVER


def test_escape_quits_only_from_menu(two_levels, rng):
    game = _game_in(GameState.MENU, two_levels, rng)
    assert handle_control_key(game, pygame.K_ESCAPE) is False

    game = _game_in(GameState.GAME_OVER, two_levels, rng)
    assert handle_control_key(game, pygame.K_ESCAPE) is True
    assert game.state is GameState.MENU


def test_escape_toggles_pause(two_levels, rng):
    game = _game_in(GameState.PLAYING, two_levels, rng)
    assert handle_control_key(game, pygame.K_ESCAPE) is True
    assert game.state is GameState.PAUSED
    handle_control_key(game, pygame.K_ESCAPE)
    assert game.state is GameState.PLAYING


def test_menu_keys_choose_level_and_start(two_levels, rng):
    game = _game_in(GameState.MENU, two_levels, rng)
    handle_control_key(game, pygame.K_UP)
    assert game.level == 1
    handle_control_key(game, pygame.K_RETURN)
    assert game.state is GameState.PLAYING
    assert game.level == 1


def test_mute_key_toggles_audio(two_levels, rng):
    audio = RecordingAudio()
    game = _game_in(GameState.PLAYING, two_levels, rng)
    assert handle_control_key(game, pygame.K_m, audio) is True
    assert audio.calls == ["toggle_mute"]


def test_final_miss_cue_survives_game_over(two_levels, rng):
    audio = RecordingAudio()
    app = _bare_app(audio=audio)
    game = GameStateMachine(cues=audio, levels=two_levels, rng=rng)
    game.on_state_change = app._on_state_change
    game.start()

    for _ in range(5):
        game.on_key("E")

    assert game.state is GameState.GAME_OVER
    assert audio.calls == ["miss"] * 5 + ["stop_melody"]
    assert not app.melody.enabled


def test_pause_stops_only_the_melody(two_levels, rng):
    audio = RecordingAudio()
    app = _bare_app(audio=audio)
    game = GameStateMachine(cues=audio, levels=two_levels, rng=rng)
    game.on_state_change = app._on_state_change
    game.start()
    assert app.melody.enabled

    game.pause()

    assert audio.calls == ["stop_melody"]
    assert not app.melody.enabled


def test_game_over_refreshes_top_scores(tmp_path, two_levels, rng):
    store = ScoreStore(tmp_path / "scores.db")
    app = _bare_app(store=store)
    game = GameStateMachine(levels=two_levels, store=store, rng=rng)
    game.on_state_change = app._on_state_change

    for _ in range(7):
        game.start()
        game.stop()

    assert len(app.top_scores) == 5
    assert all(row["score"] == 0 for row in app.top_scores)
    store.close()
