"""Full-screen states: menu, gameplay, pause overlay, game over."""

from __future__ import annotations

from collections.abc import Iterable

import pygame

from pianohero.config import TOP_SCORES_SHOWN, WINDOW_HEIGHT, WINDOW_WIDTH
from pianohero.models import GameState, RenderSnapshot
from pianohero.renderer import colors as colors_mod
from pianohero.renderer.hud import format_score, render_hud
from pianohero.renderer.playfield import (
    render_effects,
    render_hit_zone,
    render_lanes,
    render_notes,
    render_piano,
)


def leaderboard_rows(top_scores: Iterable[dict], limit: int = TOP_SCORES_SHOWN) -> list[str]:
    """One text line per rank, padded with ``---`` rows up to ``limit``."""
    rows = []
    for rank, entry in enumerate(list(top_scores)[:limit], start=1):
        level = (entry.get("final_level") or 0) + 1
        rows.append(f"{rank}. {format_score(entry['score']):>9}   Lv {level}")
    for rank in range(len(rows) + 1, limit + 1):
        rows.append(f"{rank}. {'---':>9}")
    return rows


class ScreenRenderer:
    """Draws a RenderSnapshot according to its game state."""

    def __init__(self) -> None:
        self._font = pygame.font.SysFont("monospace", 16)
        self._small = pygame.font.SysFont("monospace", 12)
        self._title = pygame.font.SysFont("monospace", 36, bold=True)

    def draw(self, surface: pygame.Surface, snapshot: RenderSnapshot, held: Iterable[str] = (),
             top_scores: Iterable[dict] = ()) -> None:
        if snapshot.state is GameState.MENU:
            self._draw_menu(surface, snapshot, top_scores)
            return

        self._draw_play(surface, snapshot, held)
        if snapshot.state is GameState.PAUSED:
            self._draw_pause(surface)
        elif snapshot.state is GameState.GAME_OVER:
            self._draw_game_over(surface, snapshot, top_scores)

    def _draw_play(self, surface: pygame.Surface, snapshot: RenderSnapshot, held: Iterable[str]) -> None:
        surface.fill(colors_mod.BG)
        render_lanes(surface)
        render_effects(surface, snapshot.effects)
        render_hit_zone(surface, self._small)
        render_notes(surface, snapshot.notes, self._small)
        render_piano(surface, held, self._small)
        render_hud(surface, snapshot, self._font)

    def _centered(self, surface: pygame.Surface, font: pygame.font.Font, text: str,
                  color: tuple[int, int, int], y: float) -> None:
        rendered = font.render(text, True, color)
        surface.blit(rendered, (WINDOW_WIDTH / 2 - rendered.get_width() / 2, y))

    def _dim(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.SRCALPHA)
        overlay.fill(colors_mod.OVERLAY)
        surface.blit(overlay, (0, 0))

    def _draw_top_scores(self, surface: pygame.Surface, top_scores: Iterable[dict], y: float) -> None:
        self._centered(surface, self._font, "TOP SCORES", colors_mod.PRIMARY, y)
        rendered = [self._font.render(row, True, colors_mod.HUD_TEXT) for row in leaderboard_rows(top_scores)]
        # Rows share a left edge so the ranks line up.
        x = WINDOW_WIDTH / 2 - max(r.get_width() for r in rendered) / 2
        for i, row in enumerate(rendered):
            surface.blit(row, (x, y + 24 + i * 18))

    def _draw_menu(self, surface: pygame.Surface, snapshot: RenderSnapshot, top_scores: Iterable[dict]) -> None:
        surface.fill(colors_mod.BG)
        self._centered(surface, self._title, "PIANO HERO", colors_mod.PRIMARY, 50)
        self._centered(surface, self._font, "Press the keys  A S D F G H J", colors_mod.SUCCESS, 120)
        self._centered(surface, self._font, f"Level: < {snapshot.level_name} >  (Up/Down)",
                       colors_mod.HUD_TEXT, 160)
        if snapshot.best_score > 0:
            self._centered(surface, self._font, f"BEST: {format_score(snapshot.best_score)}",
                           colors_mod.BONUS, 195)
        self._draw_top_scores(surface, top_scores, 240)
        self._centered(surface, self._font, "Enter: start | M: mute | Esc: quit", colors_mod.DIM_TEXT,
                       WINDOW_HEIGHT - 50)

    def _draw_pause(self, surface: pygame.Surface) -> None:
        self._dim(surface)
        self._centered(surface, self._title, "PAUSE", colors_mod.PRIMARY, WINDOW_HEIGHT / 2 - 40)
        self._centered(surface, self._font, "Esc / P to resume", colors_mod.PRIMARY, WINDOW_HEIGHT / 2 + 10)

    def _draw_game_over(self, surface: pygame.Surface, snapshot: RenderSnapshot,
                        top_scores: Iterable[dict]) -> None:
        self._dim(surface)
        self._centered(surface, self._title, "GAME OVER", colors_mod.MISS, 60)
        self._centered(surface, self._font, f"SCORE: {format_score(snapshot.last_score)}",
                       colors_mod.PRIMARY, 120)
        if snapshot.new_best:
            self._centered(surface, self._font, "NEW RECORD!", colors_mod.BONUS, 145)
        self._centered(surface, self._font, f"BEST: {format_score(snapshot.best_score)}",
                       colors_mod.SUCCESS, 170)
        self._draw_top_scores(surface, top_scores, 220)
        self._centered(surface, self._font, "Enter: replay | Esc: menu", colors_mod.PRIMARY,
                       WINDOW_HEIGHT - 50)
