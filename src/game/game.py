# src/game/game.py
import sys, argparse, random
import pygame
from pygame import K_SPACE, K_ESCAPE, K_r
from .config import FPS, SEED_DEFAULT, DEBUG_LOG, DEFAULT_CONFIG
from .loop import GameController
from .render import draw_session, load_fonts, window_size, button_rect
from .session import Status


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Angry Smooth - low gravity, wide gaps.")
    p.add_argument("--seed", type=int, default=None,
                   help="Pipe seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--fps", type=int, default=FPS,
                   help="Frames per second. Physics is per frame, so this is also game speed.")
    p.add_argument("--verbose", action="store_true", help="Print state transitions.")
    return p.parse_args(argv)


def print_transition(old: Status, new: Status, session):
    msg = f"[{old.value} -> {new.value}] score={session.score} best={session.best_score}"
    if session.death_cause:
        msg += f" cause={session.death_cause}"
    print(msg)


def run(argv=None):
    args = parse_args(argv)

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None
    else:
        launch_seed = args.seed

    cfg = DEFAULT_CONFIG
    controller = GameController(
        config=cfg,
        rng=random.Random(launch_seed),
        on_transition=print_transition if (args.verbose or DEBUG_LOG) else None,
    )

    pygame.init()
    pygame.display.set_caption("Angry Smooth")
    screen = pygame.display.set_mode(window_size(cfg))
    clock = pygame.time.Clock()
    fonts = load_fonts()
    field = pygame.Rect(0, 0, int(cfg.field_width), int(cfg.field_height))

    while True:
        clock.tick(args.fps)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_SPACE:
                    controller.primary_input()
                if event.key == K_r:
                    controller.restart()
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if not controller.session.active and button_rect(cfg).collidepoint(event.pos):
                    controller.restart()
                elif field.collidepoint(event.pos):
                    controller.primary_input()

        # Only does something while a run is ACTIVE
        controller.tick()

        screen.fill((0, 0, 0))
        draw_session(screen, controller.session, cfg, fonts)
        pygame.display.flip()


if __name__ == "__main__":
    run()
