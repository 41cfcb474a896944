# src/game/render.py
from __future__ import annotations
from typing import Dict, Tuple

import pygame

from .bird import Bird
from .config import (
    GameConfig, FOOTER_H,
    COLOR_BG, COLOR_SKY_TOP, COLOR_SKY_BOT, COLOR_FG, COLOR_MUTED,
    COLOR_PIPE, COLOR_PIPE_EDGE, COLOR_BIRD, COLOR_BIRD_EDGE, COLOR_BEAK,
    COLOR_GROUND, COLOR_ACCENT, COLOR_DANGER,
)
from .session import Session, Status

GROUND_H = 32


def window_size(cfg: GameConfig) -> Tuple[int, int]:
    return int(cfg.field_width), int(cfg.field_height) + FOOTER_H


def load_fonts() -> Dict[str, pygame.font.Font]:
    if not pygame.font.get_init():
        pygame.font.init()
    return {
        "small": pygame.font.SysFont("jetbrainsmono", 16, bold=True),
        "big": pygame.font.SysFont("jetbrainsmono", 32, bold=True),
        "huge": pygame.font.SysFont("jetbrainsmono", 72, bold=True),
    }


def button_rect(cfg: GameConfig) -> pygame.Rect:
    """Start / retry button, centered low in the field."""
    w, h = 200, 56
    return pygame.Rect((int(cfg.field_width) - w) // 2, int(cfg.field_height * 0.62), w, h)


# Built once per size, reused every frame
_SKY_CACHE: Dict[Tuple[int, int], pygame.Surface] = {}
_SPRITE_CACHE: Dict[int, pygame.Surface] = {}


def sky_surface(cfg: GameConfig) -> pygame.Surface:
    w, h = int(cfg.field_width), int(cfg.field_height)
    sky = _SKY_CACHE.get((w, h))
    if sky is None:
        sky = pygame.Surface((w, h))
        for y in range(h):
            t = y / max(1, h - 1)
            color = tuple(int(a + (b - a) * t) for a, b in zip(COLOR_SKY_TOP, COLOR_SKY_BOT))
            pygame.draw.line(sky, color, (0, y), (w, y))
        _SKY_CACHE[(w, h)] = sky
    return sky


def _build_bird_sprite(size: int) -> pygame.Surface:
    s = pygame.Surface((size, size), pygame.SRCALPHA)
    c = size // 2
    r = int(size * 0.45)
    pygame.draw.circle(s, COLOR_BIRD, (c, c), r)
    pygame.draw.circle(s, COLOR_BIRD_EDGE, (c, c), r, width=2)
    # eyes
    for ex in (int(size * 0.38), int(size * 0.62)):
        pygame.draw.circle(s, (255, 255, 255), (ex, int(size * 0.45)), max(2, size // 10))
        pygame.draw.circle(s, (0, 0, 0), (ex, int(size * 0.45)), max(1, size // 33))
    # angry brows
    pygame.draw.lines(s, (0, 0, 0), False,
                      [(int(size * 0.25), int(size * 0.35)), (c, int(size * 0.45)),
                       (int(size * 0.75), int(size * 0.35))], max(2, size // 16))
    # beak
    pygame.draw.polygon(s, COLOR_BEAK, [(int(size * 0.45), int(size * 0.52)),
                                        (int(size * 0.55), int(size * 0.52)),
                                        (c, int(size * 0.65))])
    return s


def bird_sprite(size: int) -> pygame.Surface:
    sprite = _SPRITE_CACHE.get(size)
    if sprite is None:
        sprite = _SPRITE_CACHE[size] = _build_bird_sprite(size)
    return sprite


def draw_bird(surf: pygame.Surface, bird: Bird, cfg: GameConfig):
    sprite = bird_sprite(int(cfg.bird_size))
    # pygame rotates counter-clockwise, tilt is clockwise
    rotated = pygame.transform.rotate(sprite, -bird.tilt_deg())
    center = bird.rect(cfg).center
    surf.blit(rotated, rotated.get_rect(center=center))


def draw_pipes(surf: pygame.Surface, session: Session, cfg: GameConfig):
    for pipe in session.pipes:
        x, w = int(pipe.x), int(cfg.pipe_width)
        top = pygame.Rect(x, 0, w, int(pipe.gap_top))
        bot_y = int(pipe.gap_bottom(cfg))
        bot = pygame.Rect(x, bot_y, w, max(0, int(cfg.field_height) - bot_y))
        for r in (top, bot):
            pygame.draw.rect(surf, COLOR_PIPE, r)
            pygame.draw.rect(surf, COLOR_PIPE_EDGE, r, width=3)


def _blit_centered(surf, font, text, color, cx, y):
    img = font.render(text, True, color)
    surf.blit(img, (cx - img.get_width() // 2, y))


def _draw_overlay(surf: pygame.Surface, session: Session, cfg: GameConfig, fonts):
    w, h = int(cfg.field_width), int(cfg.field_height)
    shade = pygame.Surface((w, h), pygame.SRCALPHA)
    shade.fill((15, 23, 42, 110))
    surf.blit(shade, (0, 0))

    cx = w // 2
    btn = button_rect(cfg)
    if session.status is Status.IDLE:
        _blit_centered(surf, fonts["big"], "ANGRY SMOOTH", COLOR_BIRD, cx, int(h * 0.30))
        _blit_centered(surf, fonts["small"], "LOW GRAVITY - WIDE GAPS", COLOR_FG, cx, int(h * 0.30) + 44)
        label = "LAUNCH"
    else:
        _blit_centered(surf, fonts["small"], "SCORE", COLOR_FG, cx, int(h * 0.22))
        _blit_centered(surf, fonts["huge"], str(session.score), COLOR_FG, cx, int(h * 0.22) + 24)
        _blit_centered(surf, fonts["small"], f"BEST {session.best_score}", COLOR_ACCENT, cx, int(h * 0.22) + 110)
        label = "RETRY"

    pygame.draw.rect(surf, COLOR_DANGER, btn, border_radius=12)
    pygame.draw.rect(surf, COLOR_BIRD_EDGE, btn, width=3, border_radius=12)
    _blit_centered(surf, fonts["big"], label, COLOR_FG, btn.centerx,
                   btn.centery - fonts["big"].get_height() // 2)


def _draw_footer(surf: pygame.Surface, session: Session, cfg: GameConfig, fonts):
    w, y0 = int(cfg.field_width), int(cfg.field_height)
    pygame.draw.rect(surf, COLOR_BG, pygame.Rect(0, y0, w, FOOTER_H))
    for i, (label, value, color) in enumerate((("CURRENT", session.score, COLOR_FG),
                                                ("BEST", session.best_score, COLOR_ACCENT))):
        cx = w // 4 + i * (w // 2)
        _blit_centered(surf, fonts["small"], label, COLOR_MUTED, cx, y0 + 12)
        _blit_centered(surf, fonts["big"], str(value), color, cx, y0 + 34)


def draw_session(surf: pygame.Surface, session: Session, cfg: GameConfig, fonts=None):
    """Read-only view of a session snapshot."""
    if fonts is None:
        fonts = load_fonts()
    surf.blit(sky_surface(cfg), (0, 0))
    draw_pipes(surf, session, cfg)
    draw_bird(surf, session.bird, cfg)

    w, h = int(cfg.field_width), int(cfg.field_height)
    pygame.draw.rect(surf, COLOR_GROUND, pygame.Rect(0, h - GROUND_H, w, GROUND_H))

    if session.status is Status.ACTIVE:
        score_img = fonts["huge"].render(str(session.score), True, COLOR_FG)
        score_img.set_alpha(140)
        surf.blit(score_img, (w // 2 - score_img.get_width() // 2, 40))
    else:
        _draw_overlay(surf, session, cfg, fonts)

    if surf.get_height() > h:
        _draw_footer(surf, session, cfg, fonts)
