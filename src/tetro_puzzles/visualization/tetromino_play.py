from __future__ import annotations

import argparse
import logging

import pygame

from tetro_puzzles.game import PuzzleConfig, TetrominoPuzzle, TetrominoType
from tetro_puzzles.game.pieces import Piece
from .renderer import PREVIEW_INVALID, PREVIEW_VALID, Renderer, cell_at


KEY_TO_TYPE = {
    pygame.K_1: TetrominoType.I,
    pygame.K_2: TetrominoType.O,
    pygame.K_3: TetrominoType.T,
    pygame.K_4: TetrominoType.S,
    pygame.K_5: TetrominoType.Z,
    pygame.K_6: TetrominoType.J,
    pygame.K_7: TetrominoType.L,
}


def draw_tray(screen: pygame.Surface, game: TetrominoPuzzle, font: pygame.font.Font, x0: int, y0: int, mini: int) -> int:
    """Draw the piece inventory; returns the y below the tray."""
    for idx, kind in enumerate(TetrominoType):
        count = game.inventory[kind]
        off_y = y0 + idx * (mini * 3)
        color = (200, 180, 60) if count else (70, 70, 70)
        rotation = game.selected_rotation if kind == game.selected_type else 0
        for dr, dc in Piece(kind, rotation).cells():
            rect = pygame.Rect(x0 + 60 + dc * mini, off_y + dr * mini, mini - 1, mini - 1)
            pygame.draw.rect(screen, color, rect)
        label = font.render(f"{idx + 1} {kind.name} x{count}", True, (230, 230, 230))
        screen.blit(label, (x0, off_y))
        if kind == game.selected_type:
            pygame.draw.rect(screen, (255, 255, 255), pygame.Rect(x0 - 4, off_y - 2, 140, mini * 3 - 2), 2)
    return y0 + len(TetrominoType) * mini * 3


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Tetromino fill puzzle")
    p.add_argument("--size", type=int, default=8)
    p.add_argument("--holes", type=int, default=3)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", default="WARNING")
    return p


def run() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    game = TetrominoPuzzle(PuzzleConfig(size=args.size, hole_pieces=args.holes, random_seed=args.seed))

    pygame.init()
    try:
        renderer = Renderer(cell_size=40, margin=20)
        side_panel_w = 200
        board_px = max(10, game.size) * renderer.cell_size
        screen = pygame.display.set_mode((renderer.margin * 3 + board_px + side_panel_w, renderer.margin * 2 + board_px + 80))
        pygame.display.set_caption("Tetromino Fill")
        font = pygame.font.SysFont(None, 24)
        message = ""

        running = True
        clock = pygame.time.Clock()
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    result = None
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in KEY_TO_TYPE:
                        result = game.select(KEY_TO_TYPE[event.key])
                    elif event.key == pygame.K_r:
                        result = game.rotate_selection(1)
                    elif event.key == pygame.K_u:
                        result = game.undo()
                    elif event.key == pygame.K_BACKSPACE:
                        result = game.reset()
                    elif event.key == pygame.K_n:
                        result = game.new_puzzle()
                    elif event.key in (pygame.K_MINUS, pygame.K_EQUALS):
                        step = 2 if event.key == pygame.K_EQUALS else -2
                        result = game.new_puzzle(size=min(max(10, args.size), max(4, game.size + step)))
                    elif event.key in (pygame.K_LEFTBRACKET, pygame.K_RIGHTBRACKET):
                        step = 1 if event.key == pygame.K_RIGHTBRACKET else -1
                        result = game.new_puzzle(hole_pieces=max(0, game.config.hole_pieces + step))
                    if result is not None:
                        message = "" if result.accepted else result.message
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    target = cell_at(event.pos, game.size, renderer.cell_size, renderer.margin)
                    if target is not None:
                        result = game.place_selected(*target)
                        message = "" if result.accepted else "That does not fit. Move it or rotate."

            renderer.draw_board(screen, game.grid.grid)
            hover = cell_at(pygame.mouse.get_pos(), game.size, renderer.cell_size, renderer.margin)
            if hover is not None:
                cells, valid = game.preview(*hover)
                renderer.outline_cells(screen, cells, PREVIEW_VALID if valid else PREVIEW_INVALID)

            x_text = renderer.margin * 2 + game.size * renderer.cell_size
            y_after = draw_tray(screen, game, font, x_text, renderer.margin, mini=14)
            help_lines = ["Select: 1-7", "Rotate: R", "Undo: U", "Reset: Backspace", "New: N",
                          f"Size -/=: {game.size}", f"Holes [/]: {game.config.hole_pieces}"]
            renderer.draw_text(screen, font, help_lines, x_text, y_after + 10)
            status = game.status_lines() + ([message] if message else [])
            color = (120, 230, 140) if game.is_solved else (230, 230, 230)
            renderer.draw_text(screen, font, status, renderer.margin, renderer.margin * 2 + game.size * renderer.cell_size, color)

            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
