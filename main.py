import sys
import logging

import pygame

from stack_best import BestScore
from stack_config import CONFIG
from stack_input import GravityClock, ShiftRepeat, dispatch_key, shift
from stack_log import setup_logger
from stack_render import Dims, RenderAssets
from stack_rng import UniformRandom
from stack_session import GameSession, Status

log = logging.getLogger("stacker")


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main():
    setup_logger(level=CONFIG["LOG_LEVEL"], use_rich=CONFIG["USE_RICH"])
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP])

    session = GameSession(CONFIG["COLS"], CONFIG["ROWS"], UniformRandom(CONFIG["SEED"]))
    best = BestScore(CONFIG["BEST_SCORE_PATH"])
    best.load()
    log.info("best score so far: %d", best.best)

    dims = Dims.for_grid(session.playfield.cols, session.playfield.rows)
    screen = recreate_window(dims)
    pygame.display.set_caption("Stacker")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 42)
    render = RenderAssets(dims, font, big_font)
    clock = pygame.time.Clock()

    shifter = ShiftRepeat()
    gravity = GravityClock()

    def record_best():
        if session.score:
            best.record(session.score)

    while True:
        dt = clock.tick(60)

        for e in pygame.event.get():
            if e.type == pygame.QUIT or (e.type == pygame.KEYDOWN and e.key == pygame.K_ESCAPE):
                record_best()
                pygame.quit(); sys.exit()
            if e.type == pygame.KEYDOWN:
                if e.key == pygame.K_r:
                    record_best()
                if dispatch_key(session, e.key, gravity) is Status.GAME_OVER:
                    record_best()

        if session.active:
            keys = pygame.key.get_pressed()
            step = shifter.update(dt, keys[pygame.K_LEFT], keys[pygame.K_RIGHT])
            shift(session, step)

            if gravity.update(session, dt) is Status.GAME_OVER:
                record_best()
        else:
            shifter.reset()

        render.draw(screen, session, max(best.best, session.score))
        pygame.display.flip()


if __name__ == '__main__':
    main()
