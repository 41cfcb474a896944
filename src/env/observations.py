# src/env/observations.py
from __future__ import annotations
from typing import List, Optional, Tuple

import numpy as np

from src.game.config import DEFAULT_CONFIG, GameConfig
from src.game.pipes import Pipe
from src.game.session import Session

OBS_SIZE = 8
# |vy| above this maps to +-1
VY_SCALE = 10.0

def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)

def _norm_y(y_top: float, cfg: GameConfig) -> float:
    """Normalize the bird's top into [0,1] using [0, field_height - bird_size]."""
    denom = max(1.0, cfg.field_height - cfg.bird_size)
    return _clamp01(y_top / denom)

def _norm_vy(vy: float, vy_max: float = VY_SCALE) -> float:
    """Clip vy to [-vy_max, vy_max] and scale to [-1,1]."""
    vv = max(-vy_max, min(vy, vy_max))
    return vv / vy_max

def upcoming_pipes(pipes: List[Pipe], count: int = 2) -> List[Pipe]:
    """First `count` pipes the bird still has to clear (unscored, in screen order)."""
    return [p for p in pipes if not p.scored][:count]

def _pipe_features(pipe: Optional[Pipe], cfg: GameConfig) -> Tuple[float, float, float]:
    """
    (dx, gap_top, gap_bottom), normalized.
    dx is the trailing edge's distance ahead of the bird over field_width.
    sentinel when no pipe: dx=1 (far), gap_top=0, gap_bottom=1 (wide open).
    """
    if pipe is None:
        return 1.0, 0.0, 1.0
    dx = _clamp01((pipe.trailing_edge(cfg) - cfg.bird_x) / cfg.field_width)
    top = _clamp01(pipe.gap_top / cfg.field_height)
    bot = _clamp01(pipe.gap_bottom(cfg) / cfg.field_height)
    return dx, top, bot

def build_observation(session: Session, cfg: GameConfig = DEFAULT_CONFIG) -> np.ndarray:
    """
    Returns a fixed (8,) float32 vector:
      [ y_norm, vy_norm,
        dx1, gap_top1, gap_bottom1,
        dx2, gap_top2, gap_bottom2 ]
    - y_norm in [0,1] (above the field clips to 0)
    - vy_norm in [-1,1]
    - pipe features in [0,1], for the two nearest pipes not yet passed
    """
    feats: List[float] = [
        _norm_y(float(session.bird.y), cfg),
        _norm_vy(float(session.bird.vy)),
    ]
    ahead = upcoming_pipes(session.pipes)
    ahead += [None] * (2 - len(ahead))
    for pipe in ahead:
        feats.extend(_pipe_features(pipe, cfg))
    return np.asarray(feats, dtype=np.float32)
