# src/game/config.py
from __future__ import annotations
from dataclasses import dataclass

# --- Display ---
WIDTH = 400                 # play field width (px)
HEIGHT = 600                # play field height (px)
FOOTER_H = 90               # score footer under the field (window only)
FPS = 60

# --- World / Physics (per frame, not scaled by dt) ---
GRAVITY = 0.18              # added to vy every frame
JUMP_STRENGTH = -4.2        # vy is SET to this on flap
FLOOR_MARGIN = 10           # game over once the bird sinks this close to the bottom

# --- Bird ---
BIRD_X = 50                 # bird's fixed x (world scrolls left)
BIRD_SIZE = 38
BIRD_HITBOX_INSET = 12      # forgiving hitbox, shrunk on every side

# --- Pipes ---
PIPE_WIDTH = 60
PIPE_GAP = 230
PIPE_SPEED = 1.8            # px per frame
PIPE_SPAWN_SPACING = 280    # new pipe once the last one is this far from the right edge
PIPE_HITBOX_INSET = 0
GAP_MARGIN_TOP = 60         # min distance from field top to the gap
GAP_MARGIN_BOTTOM = 120     # min distance from the gap to field bottom
SEED_DEFAULT = 12345

# --- Colors (RGB) ---
COLOR_BG = (15, 23, 42)
COLOR_SKY_TOP = (125, 211, 252)
COLOR_SKY_BOT = (14, 165, 233)
COLOR_FG = (255, 255, 255)
COLOR_MUTED = (100, 116, 139)
COLOR_PIPE = (16, 185, 129)
COLOR_PIPE_EDGE = (6, 95, 70)
COLOR_BIRD = (225, 29, 72)
COLOR_BIRD_EDGE = (159, 18, 57)
COLOR_BEAK = (251, 191, 36)
COLOR_GROUND = (30, 41, 59)
COLOR_ACCENT = (250, 204, 21)
COLOR_DANGER = (239, 68, 68)

# Print state transitions / per-frame debug
DEBUG_LOG = False


@dataclass(frozen=True)
class GameConfig:
    """
    All tunables of one game, as a single value.
    Defaults mirror the module constants above; tests build smaller fields by
    overriding a few of them.
    """
    gravity: float = GRAVITY
    jump_strength: float = JUMP_STRENGTH
    bird_size: float = BIRD_SIZE
    bird_x: float = BIRD_X
    pipe_width: float = PIPE_WIDTH
    gap_size: float = PIPE_GAP
    pipe_speed: float = PIPE_SPEED
    spawn_spacing: float = PIPE_SPAWN_SPACING
    field_width: float = WIDTH
    field_height: float = HEIGHT
    floor_margin: float = FLOOR_MARGIN
    gap_margin_top: float = GAP_MARGIN_TOP
    gap_margin_bottom: float = GAP_MARGIN_BOTTOM
    bird_hitbox_inset: float = BIRD_HITBOX_INSET
    pipe_hitbox_inset: float = PIPE_HITBOX_INSET

    def __post_init__(self):
        for name in ("bird_size", "pipe_width", "gap_size", "field_width", "field_height"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0, got {getattr(self, name)}")
        for name in ("floor_margin", "gap_margin_top", "gap_margin_bottom",
                     "bird_hitbox_inset", "pipe_hitbox_inset", "pipe_speed"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if 2 * self.bird_hitbox_inset > self.bird_size:
            raise ValueError("bird_hitbox_inset leaves an empty hitbox")

    @property
    def floor_y(self) -> float:
        """Largest bird y (top-based) that is still alive."""
        return self.field_height - self.bird_size - self.floor_margin

    @property
    def start_y(self) -> float:
        return self.field_height / 2


DEFAULT_CONFIG = GameConfig()
