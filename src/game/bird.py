# src/game/bird.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

import pygame

from .config import GameConfig
from .pipes import Box


@dataclass
class Bird:
    """
    The avatar. x is fixed (config.bird_x), so only the vertical state lives here.
    - y  : TOP of the visual square, screen coords (grows downward)
    - vy : px per frame, positive = falling
    """
    y: float
    vy: float = 0.0

    def flap(self, cfg: GameConfig):
        """Impulse: velocity is reassigned, not added to."""
        self.vy = cfg.jump_strength

    def integrated(self, cfg: GameConfig) -> Tuple[float, float]:
        """Next (y, vy) after one frame of gravity. Does not mutate."""
        vy = self.vy + cfg.gravity
        return self.y + vy, vy

    def tilt_deg(self) -> float:
        """Visual rotation only, clockwise degrees."""
        return min(self.vy * 3, 90)

    def rect(self, cfg: GameConfig) -> pygame.Rect:
        return pygame.Rect(int(cfg.bird_x), int(self.y), int(cfg.bird_size), int(cfg.bird_size))


def bird_hitbox(y: float, cfg: GameConfig) -> Box:
    """Visual square at (bird_x, y), shrunk by bird_hitbox_inset on every side."""
    inset = cfg.bird_hitbox_inset
    return Box(
        left=cfg.bird_x + inset,
        top=y + inset,
        right=cfg.bird_x + cfg.bird_size - inset,
        bottom=y + cfg.bird_size - inset,
    )
