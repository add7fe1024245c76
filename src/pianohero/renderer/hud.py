"""Heads-up display — score, best, level, lives, elapsed time, level-up banner."""

from __future__ import annotations

import pygame

from pianohero.config import WINDOW_HEIGHT, WINDOW_WIDTH
from pianohero.models import RenderSnapshot
from pianohero.renderer.colors import BONUS, MISS, PRIMARY, SUCCESS


def format_score(score: int) -> str:
    """Group thousands with a space: 12345 -> '12 345'."""
    return f"{score:,}".replace(",", " ")


def format_time(ms: float) -> str:
    """Format milliseconds as m:ss."""
    seconds = int(ms // 1000)
    return f"{seconds // 60}:{seconds % 60:02d}"


def render_hud(surface: pygame.Surface, snapshot: RenderSnapshot, font: pygame.font.Font) -> None:
    score = font.render(f"SCORE: {format_score(snapshot.score)}", True, PRIMARY)
    surface.blit(score, (4, 4))

    best = font.render(f"BEST: {format_score(snapshot.best_score)}", True, PRIMARY)
    surface.blit(best, (WINDOW_WIDTH - best.get_width() - 4, 4))

    level = font.render(snapshot.level_name.upper(), True, PRIMARY)
    surface.blit(level, (WINDOW_WIDTH / 2 - level.get_width() / 2, 4))

    lives = "#" * snapshot.lives + "." * (snapshot.max_lives - snapshot.lives)
    lives_text = font.render(f"LIVES: {lives}", True, MISS)
    surface.blit(lives_text, (4, 8 + score.get_height()))

    clock = font.render(format_time(snapshot.elapsed_ms), True, SUCCESS)
    surface.blit(clock, (WINDOW_WIDTH - clock.get_width() - 4, 8 + best.get_height()))

    if snapshot.level_up_active:
        banner = font.render("LEVEL UP!", True, BONUS)
        surface.blit(banner, (WINDOW_WIDTH / 2 - banner.get_width() / 2, WINDOW_HEIGHT / 3))
