"""Lanes, hit zone, falling notes, lane flashes and the piano strip."""

from __future__ import annotations

from collections.abc import Iterable

import pygame

from pianohero.config import HIT_LINE_Y, HIT_ZONE_HEIGHT, WINDOW_HEIGHT, WINDOW_WIDTH
from pianohero.input import symbol_keys
from pianohero.models import SYMBOLS, EffectKind, NoteRenderData, TimedEffect
from pianohero.renderer.colors import (
    BG,
    BONUS,
    HUD_TEXT,
    LANE_SEPARATOR,
    MISS,
    PRIMARY,
    SUCCESS,
)

LANE_WIDTH = WINDOW_WIDTH / len(SYMBOLS)
PIANO_HEIGHT = 20
PIANO_Y = WINDOW_HEIGHT - PIANO_HEIGHT - 4


def _blend(surface: pygame.Surface, color: tuple[int, int, int], rect: pygame.Rect, alpha: float) -> None:
    layer = pygame.Surface(rect.size, pygame.SRCALPHA)
    layer.fill((*color, int(255 * alpha)))
    surface.blit(layer, rect.topleft)


def render_lanes(surface: pygame.Surface) -> None:
    for i in range(1, len(SYMBOLS)):
        x = int(i * LANE_WIDTH)
        pygame.draw.line(surface, LANE_SEPARATOR, (x, 0), (x, WINDOW_HEIGHT))


def render_hit_zone(surface: pygame.Surface, font: pygame.font.Font) -> None:
    _blend(surface, SUCCESS, pygame.Rect(0, HIT_LINE_Y, WINDOW_WIDTH, HIT_ZONE_HEIGHT), 0.3)
    pygame.draw.line(surface, PRIMARY, (0, HIT_LINE_Y), (WINDOW_WIDTH, HIT_LINE_Y), 2)

    for i, symbol in enumerate(SYMBOLS):
        label = font.render(symbol_keys(symbol)[0], True, PRIMARY)
        cx = i * LANE_WIDTH + LANE_WIDTH / 2
        surface.blit(label, (cx - label.get_width() / 2, HIT_LINE_Y + HIT_ZONE_HEIGHT - label.get_height()))


def render_effects(surface: pygame.Surface, effects: Iterable[TimedEffect]) -> None:
    for effect in effects:
        color = PRIMARY if effect.kind is EffectKind.HIT else MISS
        rect = pygame.Rect(int(effect.lane * LANE_WIDTH), HIT_LINE_Y - 10, int(LANE_WIDTH), HIT_ZONE_HEIGHT + 20)
        _blend(surface, color, rect, 0.5)


def render_notes(surface: pygame.Surface, notes: Iterable[NoteRenderData], font: pygame.font.Font) -> None:
    for note in notes:
        # Scale around the note's centre so the bonus pulse does not drift.
        cx = note.x + note.width / 2 / note.scale
        cy = note.y + note.height / 2 / note.scale
        rect = pygame.Rect(int(cx - note.width / 2), int(cy - note.height / 2), int(note.width), int(note.height))

        if note.is_bonus:
            color = SUCCESS if note.hit else BONUS
        else:
            color = LANE_SEPARATOR if note.hit else PRIMARY
        _blend(surface, color, rect, note.alpha)
        pygame.draw.rect(surface, LANE_SEPARATOR, rect, 1)

        if note.hit:
            continue
        if note.is_bonus:
            # Small cross as a star
            pygame.draw.rect(surface, HUD_TEXT, (int(cx) - 1, int(cy) - 3, 2, 6))
            pygame.draw.rect(surface, HUD_TEXT, (int(cx) - 3, int(cy) - 1, 6, 2))
        else:
            label = font.render(note.symbol, True, BG)
            surface.blit(label, (cx - label.get_width() / 2, cy - label.get_height() / 2))


def render_piano(surface: pygame.Surface, held: Iterable[str], font: pygame.font.Font) -> None:
    """Draw one key per lane along the bottom, lit while held."""
    held = set(held)
    for i, symbol in enumerate(SYMBOLS):
        active = symbol in held
        rect = pygame.Rect(int(i * LANE_WIDTH + 2), PIANO_Y, int(LANE_WIDTH - 4), PIANO_HEIGHT)
        pygame.draw.rect(surface, PRIMARY if active else SUCCESS, rect)
        pygame.draw.rect(surface, LANE_SEPARATOR, rect, 1)
        label = font.render(symbol, True, BG if active else LANE_SEPARATOR)
        surface.blit(label, (rect.centerx - label.get_width() / 2, rect.centery - label.get_height() / 2))
