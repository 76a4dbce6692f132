"""Grid primitives: cells, mazes, positions and directions."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, List, NamedTuple, Sequence, Union

import numpy as np

WALL = 1
PATH = 0


class MazeError(Exception):
    """Base class for errors raised by the maze engine."""


class InvalidDimensions(MazeError, ValueError):
    """Raised when a maze is requested with a non-positive width or height."""


class GenerationFailed(MazeError, RuntimeError):
    """Raised when no structurally valid maze was produced within the attempt cap."""


class InvalidInstruction(MazeError, ValueError):
    """Raised when a program token does not name a direction."""


class Position(NamedTuple):
    x: int
    y: int


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def coerce(cls, value: Union["Direction", str]) -> "Direction":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            raise InvalidInstruction(f"Unknown direction: {value!r}") from exc


DIRECTIONS: Dict[Direction, Position] = {
    Direction.UP: Position(0, -1),
    Direction.DOWN: Position(0, 1),
    Direction.LEFT: Position(-1, 0),
    Direction.RIGHT: Position(1, 0),
}


class Cell:
    """One grid unit. Coordinates are fixed; only the wall and visited flags change."""

    __slots__ = ("_x", "_y", "is_wall", "visited")

    def __init__(self, x: int, y: int, is_wall: bool = True, visited: bool = False) -> None:
        self._x = x
        self._y = y
        self.is_wall = is_wall
        self.visited = visited

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    def __repr__(self) -> str:
        return f"Cell(x={self._x}, y={self._y}, is_wall={self.is_wall}, visited={self.visited})"


class Maze:
    """Rectangular grid of cells indexed as ``maze[y][x]``."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.rows: List[List[Cell]] = [
            [Cell(x, y) for x in range(width)] for y in range(height)
        ]

    def __getitem__(self, y: int) -> List[Cell]:
        return self.rows[y]

    def __iter__(self) -> Iterator[List[Cell]]:
        return iter(self.rows)

    def __len__(self) -> int:
        return self.height

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Maze):
            return NotImplemented
        return self.to_grid() == other.to_grid()

    def __repr__(self) -> str:
        return f"Maze(width={self.width}, height={self.height})"

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_open(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and not self.rows[y][x].is_wall

    def open_cells(self) -> List[Position]:
        return [Position(cell.x, cell.y) for row in self.rows for cell in row if not cell.is_wall]

    def to_grid(self) -> List[List[int]]:
        return [[WALL if cell.is_wall else PATH for cell in row] for row in self.rows]

    def to_array(self) -> np.ndarray:
        return np.array(self.to_grid(), dtype=np.uint8).reshape(self.height, self.width)

    @classmethod
    def from_grid(cls, grid: Sequence[Sequence[int]]) -> "Maze":
        height = len(grid)
        width = len(grid[0]) if height else 0
        if any(len(row) != width for row in grid):
            raise ValueError("Maze grid rows must all have the same length")
        maze = cls(width, height)
        for y, row in enumerate(grid):
            for x, value in enumerate(row):
                maze.rows[y][x].is_wall = int(value) == WALL
        return maze


__all__ = [
    "WALL",
    "PATH",
    "MazeError",
    "InvalidDimensions",
    "GenerationFailed",
    "InvalidInstruction",
    "Position",
    "Direction",
    "DIRECTIONS",
    "Cell",
    "Maze",
]
