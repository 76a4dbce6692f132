"""Draw mazes, execution trails and the character with Pillow."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from .grid import Maze, Position

RESAMPLE_NEAREST = Image.Resampling.NEAREST

WALL_COLOR = (0, 0, 0)
PATH_COLOR = (255, 255, 255)
START_COLOR = (220, 30, 30)
END_COLOR = (40, 180, 80)
TRAIL_COLOR = (60, 120, 230)
CHARACTER_COLOR = (250, 190, 20)


def cell_center(position: Position, cell_size: int) -> Tuple[float, float]:
    x, y = position
    return (x * cell_size + cell_size / 2, y * cell_size + cell_size / 2)


def render_maze(
    maze: Maze,
    *,
    start: Position,
    end: Position,
    cell_size: int = 32,
    path: Optional[Sequence[Position]] = None,
    character: Optional[Position] = None,
) -> Image.Image:
    if cell_size < 1:
        raise ValueError("cell_size must be positive")

    walls = maze.to_array().astype(bool)
    colors = np.empty((maze.height, maze.width, 3), dtype=np.uint8)
    colors[walls] = WALL_COLOR
    colors[~walls] = PATH_COLOR
    for (x, y), color in ((start, START_COLOR), (end, END_COLOR)):
        if maze.in_bounds(x, y):
            colors[y, x] = color

    canvas = Image.fromarray(colors).resize(
        (maze.width * cell_size, maze.height * cell_size), RESAMPLE_NEAREST
    )
    draw = ImageDraw.Draw(canvas)

    thickness = max(2, cell_size // 4)
    if path:
        points = [cell_center(position, cell_size) for position in path]
        if len(points) >= 2:
            draw.line(points, fill=TRAIL_COLOR, width=thickness, joint="curve")
        else:
            _draw_dot(draw, points[0], thickness, TRAIL_COLOR)

    if character is not None:
        _draw_dot(draw, cell_center(character, cell_size), max(4, cell_size // 2), CHARACTER_COLOR)
    return canvas


def _draw_dot(
    draw: ImageDraw.ImageDraw,
    center: Tuple[float, float],
    diameter: int,
    color: Tuple[int, int, int],
) -> None:
    cx, cy = center
    radius = diameter / 2
    draw.ellipse((cx - radius, cy - radius, cx + radius, cy + radius), fill=color)


__all__ = ["render_maze", "cell_center"]
