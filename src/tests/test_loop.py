# src/tests/test_loop.py
import random

from src.game.config import DEFAULT_CONFIG
from src.game.loop import FrameLoop, GameController
from src.game.pipes import Pipe
from src.game.session import Status

CFG = DEFAULT_CONFIG


def make_controller(**kw):
    events = []
    ctl = GameController(config=CFG, rng=random.Random(3),
                         on_transition=lambda old, new, s: events.append((old, new)), **kw)
    return ctl, events


def test_frame_loop_registration():
    loop = FrameLoop()
    calls = []
    assert loop.tick() is False
    loop.start(lambda: calls.append(1))
    loop.start(lambda: calls.append(2))   # replaces, doesn't stack
    assert loop.running
    assert loop.tick() is True
    assert calls == [2]
    loop.stop()
    assert not loop.running
    assert loop.tick() is False
    assert calls == [2]


def test_idle_until_primary_input():
    ctl, events = make_controller()
    assert ctl.status is Status.IDLE
    assert not ctl.loop.running
    assert ctl.tick() is False
    assert ctl.session.bird.y == CFG.start_y

    ctl.primary_input()
    assert ctl.status is Status.ACTIVE
    assert ctl.loop.running
    assert events == [(Status.IDLE, Status.ACTIVE)]
    # first press starts, it does not flap
    assert ctl.session.bird.vy == 0.0


def test_primary_input_flaps_while_active():
    ctl, _ = make_controller()
    ctl.primary_input()
    for _ in range(10):
        ctl.tick()
    ctl.primary_input()
    assert ctl.session.bird.vy == CFG.jump_strength
    assert ctl.status is Status.ACTIVE


def test_loop_stops_on_game_over_and_restarts():
    ctl, events = make_controller()
    ctl.primary_input()
    frames = 0
    while ctl.tick():
        frames += 1
        assert frames < 1000
    # free fall from the middle hits the floor
    assert ctl.status is Status.ENDED
    assert ctl.session.death_cause == "floor"
    assert not ctl.loop.running
    assert events[-1] == (Status.ACTIVE, Status.ENDED)

    # no stray updates after the end
    y = ctl.session.bird.y
    assert ctl.tick() is False
    assert ctl.session.bird.y == y

    ctl.primary_input()
    assert ctl.status is Status.ACTIVE
    assert ctl.loop.running
    assert ctl.frames == 0
    assert events[-1] == (Status.ENDED, Status.ACTIVE)


def test_restart_mid_fall_resets_immediately():
    # Scenario D
    ctl, events = make_controller()
    ctl.primary_input()
    for _ in range(40):
        ctl.tick()
    ctl.session.score = 2
    assert ctl.session.bird.y > CFG.start_y
    assert ctl.session.pipes

    ctl.restart()
    s = ctl.session
    assert s.status is Status.ACTIVE
    assert (s.bird.y, s.bird.vy, s.pipes, s.score) == (CFG.start_y, 0.0, [], 0)
    assert ctl.loop.running
    assert events[-1] == (Status.ACTIVE, Status.ACTIVE)
    # best only moves on game over
    assert s.best_score == 0


def test_best_score_survives_restarts():
    ctl, _ = make_controller()
    ctl.primary_input()
    ctl.session.score = 3
    ctl.session.pipes = [Pipe(x=CFG.bird_x, gap_top=500.0)]
    ctl.tick()
    assert ctl.status is Status.ENDED
    assert ctl.session.best_score == 3

    ctl.primary_input()
    assert ctl.session.best_score == 3
    ctl.session.score = 1
    ctl.session.bird.y = 600.0
    ctl.tick()
    assert ctl.status is Status.ENDED
    assert ctl.session.best_score == 3
