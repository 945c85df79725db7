import argparse
import logging
import sys

import pygame

from polytris_config import CONFIG
from polytris_game import GRAVITY_EVENT, Game
from polytris_input import HeldKeys, command_for
from polytris_layout import compute_dims
from polytris_overlay import LevelUpBanner
from polytris_render import RenderAssets


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Tetris with a fresh set of polyominoes every round")
    p.add_argument("--seed", type=int, default=CONFIG["SEED"], help="seed for reproducible rounds")
    p.add_argument("--cell", type=int, default=CONFIG["CELL_SIZE"], help="cell size in pixels")
    p.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING, ...")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    CONFIG["CELL_SIZE"] = args.cell

    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, GRAVITY_EVENT])

    dims = compute_dims()
    screen = recreate_window(dims)
    pygame.display.set_caption("Polytris")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 42)

    render = RenderAssets(dims, font)
    banner = LevelUpBanner(big_font, dims.board_w)
    clock = pygame.time.Clock()

    game = Game(seed=args.seed)
    held = HeldKeys()

    while True:
        dt = clock.tick(60)
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                game.timer.cancel()
                pygame.quit(); sys.exit()
            if e.type == GRAVITY_EVENT:
                game.on_gravity(getattr(e, "generation", None))
                continue
            cmd = command_for(e)
            if cmd:
                game.dispatch(cmd)
        for cmd in held.poll(dt):
            game.dispatch(cmd)

        render.draw(screen, game.snapshot())
        banner.draw(screen, game, dims.board_x, dims.board_y, dims.board_h)
        if game.game_over:
            msg = big_font.render("GAME OVER (R to Restart)", True, (255, 220, 220))
            rect = msg.get_rect(center=(dims.board_x + dims.board_w // 2, dims.board_y + dims.board_h // 2))
            screen.blit(msg, rect)
        pygame.display.flip()


if __name__ == '__main__':
    main()
