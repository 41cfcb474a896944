# src/game/session.py
from __future__ import annotations
import enum
from dataclasses import dataclass, field
from typing import List, Optional

from .bird import Bird, bird_hitbox
from .config import DEFAULT_CONFIG, GameConfig
from .pipes import Pipe, advance_pipes, should_spawn, spawn_gap_top


class Status(enum.Enum):
    IDLE = "idle"        # start screen
    ACTIVE = "active"    # simulation running
    ENDED = "ended"      # crashed, summary shown


@dataclass
class Session:
    """
    Whole mutable state of one play-through.
    Reset in place on restart; best_score survives restarts (memory only).
    """
    bird: Bird
    pipes: List[Pipe] = field(default_factory=list)
    score: int = 0
    best_score: int = 0
    status: Status = Status.IDLE
    death_cause: Optional[str] = None   # "floor" | "pipe" | None

    @classmethod
    def new(cls, cfg: GameConfig = DEFAULT_CONFIG) -> "Session":
        return cls(bird=Bird(y=cfg.start_y, vy=0.0))

    @property
    def active(self) -> bool:
        return self.status is Status.ACTIVE


def restart(session: Session, cfg: GameConfig = DEFAULT_CONFIG):
    """IDLE/ENDED/ACTIVE -> ACTIVE with a fresh field. Keeps best_score."""
    session.bird.y = cfg.start_y
    session.bird.vy = 0.0
    session.pipes = []
    session.score = 0
    session.death_cause = None
    session.status = Status.ACTIVE


def end(session: Session, cause: str):
    """ACTIVE -> ENDED. best_score only moves here."""
    session.status = Status.ENDED
    session.death_cause = cause
    if session.score > session.best_score:
        session.best_score = session.score


def update_step(session: Session, rng, cfg: GameConfig = DEFAULT_CONFIG) -> Status:
    """
    Advance an ACTIVE session by one frame and return the resulting status.

    Every check works on this frame's tentative values (bird at its new y,
    pipes already scrolled). Nothing is committed on a terminal frame: the
    session keeps the previous frame's bird, pipes and score.

    `rng` only needs a random() -> [0, 1) method (random.Random or a numpy
    Generator); it is called at most once, when a pipe spawns.
    """
    if session.status is not Status.ACTIVE:
        return session.status

    # 1) gravity
    new_y, new_vy = session.bird.integrated(cfg)

    # 2) floor (no ceiling)
    if new_y > cfg.floor_y:
        end(session, "floor")
        return session.status

    # 3) spawn
    pipes = list(session.pipes)
    if should_spawn(pipes, cfg):
        pipes.append(Pipe(x=cfg.field_width, gap_top=spawn_gap_top(rng, cfg)))

    # 4) scroll + cull
    pipes = advance_pipes(pipes, cfg)

    # 5) collisions, then scoring
    hitbox = bird_hitbox(new_y, cfg)
    score = session.score
    for pipe in pipes:
        if pipe.hit_by(hitbox, cfg):
            end(session, "pipe")
            return session.status
        if not pipe.scored and pipe.trailing_edge(cfg) < cfg.bird_x:
            pipe.scored = True
            score += 1

    # 6) commit
    session.bird.y = new_y
    session.bird.vy = new_vy
    session.pipes = pipes
    session.score = score
    return session.status
