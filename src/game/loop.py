# src/game/loop.py
from __future__ import annotations
import random
from typing import Callable, Optional

from .config import DEFAULT_CONFIG, GameConfig
from .session import Session, Status, restart, update_step

TransitionHook = Callable[[Status, Status, Session], None]


class FrameLoop:
    """
    Frame-callback registration, decoupled from pygame.
    The host calls tick() once per display frame; the callback only runs
    while registered.
    """
    def __init__(self):
        self._callback: Optional[Callable[[], None]] = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, callback: Callable[[], None]):
        # re-registering replaces, never stacks
        self._callback = callback

    def stop(self):
        self._callback = None

    def tick(self) -> bool:
        """Run the registered callback once. Returns False if nothing is registered."""
        if self._callback is None:
            return False
        self._callback()
        return True


class GameController:
    """
    Owns the session and keeps the frame loop in sync with its status:
    registered on every entry into ACTIVE, deregistered on every exit.
    """
    def __init__(self,
                 config: GameConfig = DEFAULT_CONFIG,
                 rng=None,
                 session: Optional[Session] = None,
                 loop: Optional[FrameLoop] = None,
                 on_transition: Optional[TransitionHook] = None):
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.session = session if session is not None else Session.new(config)
        self.loop = loop if loop is not None else FrameLoop()
        self.on_transition = on_transition
        self.frames = 0   # frames simulated in the current run

    @property
    def status(self) -> Status:
        return self.session.status

    def primary_input(self):
        """Tap / click / space: flap while ACTIVE, (re)start otherwise."""
        if self.session.status is Status.ACTIVE:
            self.session.bird.flap(self.config)
        else:
            self.restart()

    def restart(self):
        """Start or retry. Also valid mid-run: the current fall is dropped."""
        old = self.session.status
        restart(self.session, self.config)
        self.frames = 0
        self.loop.start(self._on_frame)
        self._notify(old, self.session.status)

    def tick(self) -> bool:
        return self.loop.tick()

    def _on_frame(self):
        old = self.session.status
        new = update_step(self.session, self.rng, self.config)
        self.frames += 1
        if new is not Status.ACTIVE:
            self.loop.stop()
            self._notify(old, new)

    def _notify(self, old: Status, new: Status):
        if self.on_transition is not None:
            self.on_transition(old, new, self.session)
