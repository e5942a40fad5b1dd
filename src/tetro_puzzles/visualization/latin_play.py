from __future__ import annotations

import argparse
import logging

import pygame

from tetro_puzzles.latin import LatinConfig, LatinPuzzle
from .renderer import GIVEN, PREVIEW_INVALID, Renderer, cell_at


def run() -> None:
    p = argparse.ArgumentParser(description="Latin square puzzle")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", default="WARNING")
    args = p.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    try:
        puzzle = LatinPuzzle(LatinConfig(random_seed=args.seed))
        renderer = Renderer(cell_size=80, margin=20)
        board_px = puzzle.size * renderer.cell_size
        screen = pygame.display.set_mode((board_px + renderer.margin * 2, board_px + renderer.margin * 2 + 100))
        pygame.display.set_caption("Latin Square - Human Play")
        font = pygame.font.SysFont(None, 24)
        clock = pygame.time.Clock()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_u:
                        puzzle.undo()
                    elif event.key == pygame.K_BACKSPACE:
                        puzzle.reset()
                    elif event.key == pygame.K_n:
                        puzzle.new_puzzle()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    target = cell_at(event.pos, puzzle.size, renderer.cell_size, renderer.margin)
                    if target is not None:
                        puzzle.toggle(*target)

            renderer.draw_board(screen, puzzle.grid)
            renderer.outline_cells(screen, puzzle.givens, GIVEN, width=4)
            renderer.outline_cells(screen, puzzle.conflicts, PREVIEW_INVALID, width=3)
            block_px = puzzle.config.block * renderer.cell_size
            for i in range(1, puzzle.size // puzzle.config.block):
                edge = renderer.margin + i * block_px
                pygame.draw.line(screen, (230, 230, 230), (edge, renderer.margin), (edge, renderer.margin + board_px), 3)
                pygame.draw.line(screen, (230, 230, 230), (renderer.margin, edge), (renderer.margin + board_px, edge), 3)
            lines = puzzle.status_lines() + ["Click: toggle  U: undo  Backspace: reset  N: new"]
            color = (120, 230, 140) if puzzle.is_solved else (230, 230, 230)
            renderer.draw_text(screen, font, lines, renderer.margin, renderer.margin * 2 + board_px, color)

            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
