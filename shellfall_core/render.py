from __future__ import annotations

from .host import Canvas
from .tile import Tile

TILE_FILL = '#4a4a4a'
TEXT_FILL = '#ffffff'
TILE_FONT = '16px monospace'
TEXT_INSET_X = 10
TEXT_BASELINE_Y = 25

OVERLAY_FILL = 'rgba(0, 0, 0, 0.7)'
TITLE_FONT = '48px Arial'
SCORE_FONT = '24px Arial'


def draw_tile(canvas: Canvas, tile: Tile, width: int, height: int) -> None:
    """Draws the tile background and its command text."""
    canvas.fill_rect(tile.x, tile.y, width, height, TILE_FILL)
    canvas.fill_text(tile.command, tile.x + TEXT_INSET_X, tile.y + TEXT_BASELINE_Y, TEXT_FILL, TILE_FONT)


def draw_game_over(canvas: Canvas, score: int) -> None:
    """Dims the whole canvas and prints the final score on top."""
    w, h = canvas.width, canvas.height
    canvas.fill_rect(0, 0, w, h, OVERLAY_FILL)
    canvas.fill_text('Game Over', w / 2, h / 2 - 50, TEXT_FILL, TITLE_FONT, align='center')
    canvas.fill_text(f'Final Score: {score}', w / 2, h / 2 + 50, TEXT_FILL, SCORE_FONT, align='center')
