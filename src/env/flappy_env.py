# src/env/flappy_env.py
from __future__ import annotations
import os
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.game.config import FPS, DEFAULT_CONFIG, GameConfig
from src.game.loop import GameController
from src.game.render import draw_session, load_fonts, window_size
from src.env.observations import build_observation, OBS_SIZE


class FlappyEnv(gym.Env):
    """
    Angry Smooth Gymnasium environment (vector observations).
    - Physics is per frame (60 frames = 1 s of play).
    - Agent acts every `frame_skip` frames (default 2) -> 30 decisions/sec.
    - Observation: shape (8,), float32, see build_observation.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 2,
                 time_limit_seconds: Optional[float] = 60.0,
                 pass_bonus: float = 5.0,
                 config: GameConfig = DEFAULT_CONFIG):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.pass_bonus = float(pass_bonus)
        self.config = config

        # Optional built-in truncation (you can also use a TimeLimit wrapper)
        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        # --- Gym spaces ---
        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)

        # [y, vy, dx1, top1, bot1, dx2, top2, bot2]
        low = np.array([0.0, -1.0] + [0.0] * (OBS_SIZE - 2), dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.controller: Optional[GameController] = None
        self.timestep: int = 0   # number of *decision* steps elapsed

        # Rendering
        self.screen = None
        self.clock = None
        self.fonts = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # One controller for the env's lifetime so best_score carries across episodes.
        # Pipe gaps are drawn from the env's generator, so seed => same layout.
        if self.controller is None:
            self.controller = GameController(config=self.config, rng=self.np_random)
        else:
            self.controller.rng = self.np_random
        self.controller.restart()
        self.timestep = 0

        obs = self._get_obs()
        info = self._info()
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.controller is not None, "Call reset() before step()"
        session = self.controller.session

        if int(action) == 1 and session.active:
            self.controller.primary_input()

        score_before = session.score
        # Simulate frame_skip frames; the loop deregisters itself on death
        for _ in range(self.frame_skip):
            if not self.controller.tick():
                break

        alive = session.active
        passed = session.score - score_before
        reward = (1.0 + self.pass_bonus * passed) if alive else -1.0

        self.timestep += 1
        terminated = not alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        obs = self._get_obs()
        info = self._info()

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.controller is not None
        return build_observation(self.controller.session, self.config)

    def _info(self) -> Dict[str, Any]:
        session = self.controller.session
        return {
            "score": session.score,
            "best_score": session.best_score,
            "frames": self.controller.frames,
            "timestep": self.timestep,
            "death_cause": session.death_cause,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.controller is None:
            return None

        if self.screen is None:
            if self.render_mode == "rgb_array":
                os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode(window_size(self.config))
                pygame.display.set_caption("Angry Smooth - Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface(window_size(self.config))
            self.fonts = load_fonts()

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()

        draw_session(self.screen, self.controller.session, self.config, self.fonts)

        if self.render_mode == "human":
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.fonts = None
