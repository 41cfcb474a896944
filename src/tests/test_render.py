# src/tests/test_render.py
import os
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from src.game.config import DEFAULT_CONFIG, COLOR_SKY_BOT, COLOR_SKY_TOP
from src.game.game import parse_args
from src.game.pipes import Pipe
from src.game.render import (
    bird_sprite, button_rect, draw_session, load_fonts, sky_surface, window_size,
)
from src.game.session import Session, Status, restart

CFG = DEFAULT_CONFIG


@pytest.fixture(scope="module")
def fonts():
    pygame.init()
    yield load_fonts()
    pygame.quit()


@pytest.mark.parametrize("status", list(Status))
def test_draw_every_status(fonts, status):
    s = Session.new(CFG)
    restart(s, CFG)
    s.pipes = [Pipe(x=120.0, gap_top=150.0), Pipe(x=390.0, gap_top=80.0)]
    s.bird.vy = 6.0
    s.status = status
    surf = pygame.Surface(window_size(CFG))
    draw_session(surf, s, CFG, fonts)
    # pipe body is drawn in the column above the gap
    assert surf.get_at((150, 50))[:3] != surf.get_at((10, 50))[:3]


def test_button_inside_field():
    field = pygame.Rect(0, 0, int(CFG.field_width), int(CFG.field_height))
    assert field.contains(button_rect(CFG))


def test_cli_seed_defaults():
    args = parse_args([])
    assert args.seed is None and args.fps == 60 and not args.verbose
    args = parse_args(["--seed", "-1", "--verbose"])
    assert args.seed == -1 and args.verbose


def test_sky_and_sprite_built_once(fonts):
    assert sky_surface(CFG) is sky_surface(CFG)
    assert bird_sprite(int(CFG.bird_size)) is bird_sprite(int(CFG.bird_size))
    # top row uses the top sky color, bottom row the bottom one
    sky = sky_surface(CFG)
    assert tuple(sky.get_at((5, 0)))[:3] == COLOR_SKY_TOP
    assert tuple(sky.get_at((5, int(CFG.field_height) - 1)))[:3] == COLOR_SKY_BOT
