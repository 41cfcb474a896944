# src/game/pipes.py
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import List, Tuple

from .config import GameConfig


@dataclass(frozen=True)
class Box:
    """Axis-aligned box in float screen coords (y grows downward)."""
    left: float
    top: float
    right: float
    bottom: float

    def overlaps(self, other: "Box") -> bool:
        # strict: touching edges is not a hit
        return (self.right > other.left and self.left < other.right and
                self.bottom > other.top and self.top < other.bottom)


@dataclass
class Pipe:
    """One pipe column: solid above gap_top and below gap_top + gap."""
    x: float            # left edge
    gap_top: float      # y where the upper barrier ends
    scored: bool = False

    def trailing_edge(self, cfg: GameConfig) -> float:
        return self.x + cfg.pipe_width

    def gap_bottom(self, cfg: GameConfig) -> float:
        return self.gap_top + cfg.gap_size

    def boxes(self, cfg: GameConfig) -> Tuple[Box, Box]:
        """(upper, lower) collision boxes, horizontally shrunk by pipe_hitbox_inset."""
        left = self.x + cfg.pipe_hitbox_inset
        right = self.trailing_edge(cfg) - cfg.pipe_hitbox_inset
        # The upper barrier has no top: going over the screen doesn't clear a column.
        upper = Box(left, float("-inf"), right, self.gap_top)
        lower = Box(left, self.gap_bottom(cfg), right, cfg.field_height)
        return upper, lower

    def hit_by(self, hitbox: Box, cfg: GameConfig) -> bool:
        upper, lower = self.boxes(cfg)
        return hitbox.overlaps(upper) or hitbox.overlaps(lower)


def gap_top_bounds(cfg: GameConfig) -> Tuple[float, float]:
    """
    Range for a new pipe's gap_top so gap + margins fit in the field.
    Collapses to a single point instead of going negative on tiny fields.
    """
    lo = cfg.gap_margin_top
    span = cfg.field_height - cfg.gap_size - cfg.gap_margin_top - cfg.gap_margin_bottom
    return lo, lo + max(0.0, span)


def spawn_gap_top(rng, cfg: GameConfig) -> float:
    """Uniform draw in gap_top_bounds using a single rng.random() call."""
    lo, hi = gap_top_bounds(cfg)
    return lo + float(rng.random()) * (hi - lo)


def should_spawn(pipes: List[Pipe], cfg: GameConfig) -> bool:
    if not pipes:
        return True
    return pipes[-1].x < cfg.field_width - cfg.spawn_spacing


def advance_pipes(pipes: List[Pipe], cfg: GameConfig) -> List[Pipe]:
    """
    Scroll every pipe left by pipe_speed and drop the ones fully off-screen.
    Returns new Pipe objects; the input list is left untouched.
    """
    moved = [replace(p, x=p.x - cfg.pipe_speed) for p in pipes]
    return [p for p in moved if p.trailing_edge(cfg) > 0]
