"""Seeded maze generation and the puzzle dataset builder built on top of it."""

from __future__ import annotations

import argparse
import logging
import random
import string
import uuid
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from ..base import AbstractPuzzleGenerator, PathLike
from .grid import (
    DIRECTIONS,
    Direction,
    GenerationFailed,
    InvalidDimensions,
    Maze,
    Position,
)
from .interpreter import execute
from .render import render_maze
from .rng import SeededRandom

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 15
DEFAULT_HEIGHT = 15
MAX_ATTEMPTS = 1000
START = Position(1, 1)

_CARVE_ORDER = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)
_SEED_ALPHABET = string.digits + string.ascii_lowercase


@dataclass
class GeneratedMaze:
    maze: Maze
    start: Position
    end: Position
    seed: str
    attempts: int = 1

    def __iter__(self) -> Iterator:
        return iter((self.maze, self.start, self.end))


def generate_maze(
    width: int,
    height: int,
    seed: str,
    *,
    max_attempts: int = MAX_ATTEMPTS,
) -> GeneratedMaze:
    """Carve a maze from ``seed``, retrying with derived seeds until it is valid.

    Retry ``n`` uses the seed ``f"{seed}{n}"``, so the whole sequence of
    attempts is reproducible from the original seed. Grids too small to ever
    hold a non-linear maze (any side below 4) exhaust the attempts and raise
    :class:`GenerationFailed`.
    """

    _check_dimensions(width, height)
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    for attempt in range(max_attempts):
        attempt_seed = seed if attempt == 0 else f"{seed}{attempt}"
        maze = _carve(width, height, SeededRandom(attempt_seed))
        if is_structurally_valid(maze):
            if attempt:
                logger.debug("Seed %r produced a valid %dx%d maze after %d retries", seed, width, height, attempt)
            return GeneratedMaze(
                maze=maze,
                start=START,
                end=_find_end(maze),
                seed=seed,
                attempts=attempt + 1,
            )
        logger.debug("Rejected degenerate %dx%d maze for seed %r", width, height, attempt_seed)

    logger.warning("No valid %dx%d maze for seed %r after %d attempts", width, height, seed, max_attempts)
    raise GenerationFailed(
        f"Could not generate a valid {width}x{height} maze for seed {seed!r} in {max_attempts} attempts"
    )


def is_structurally_valid(maze: Maze) -> bool:
    """A maze needs two open cells spread over more than one row and column."""

    cells = maze.open_cells()
    if len(cells) < 2:
        return False
    if len({cell.y for cell in cells}) == 1:
        return False
    if len({cell.x for cell in cells}) == 1:
        return False
    return True


def solve(maze: Maze, start: Position, end: Position) -> Optional[Tuple[Direction, ...]]:
    """Shortest program from ``start`` to ``end``, or ``None`` if unreachable."""

    start, end = Position(*start), Position(*end)
    queue: deque[Position] = deque([start])
    parents: Dict[Position, Optional[Tuple[Position, Direction]]] = {start: None}
    while queue:
        current = queue.popleft()
        if current == end:
            break
        for direction in _CARVE_ORDER:
            dx, dy = DIRECTIONS[direction]
            nxt = Position(current.x + dx, current.y + dy)
            if maze.is_open(nxt.x, nxt.y) and nxt not in parents:
                parents[nxt] = (current, direction)
                queue.append(nxt)

    if end not in parents:
        return None
    program: List[Direction] = []
    node = parents[end]
    while node is not None:
        previous, direction = node
        program.append(direction)
        node = parents[previous]
    program.reverse()
    return tuple(program)


# ----------------------------------------------------------------------


def _check_dimensions(width: int, height: int) -> None:
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidDimensions(f"{name} must be an integer, got {value!r}")
        if value < 1:
            raise InvalidDimensions(f"{name} must be positive, got {value}")


def _carve(width: int, height: int, rng: SeededRandom) -> Maze:
    maze = Maze(width, height)
    if not maze.in_bounds(*START):
        return maze

    def enter(x: int, y: int) -> List:
        cell = maze[y][x]
        cell.is_wall = False
        cell.visited = True
        directions = list(_CARVE_ORDER)
        rng.shuffle(directions)
        return [x, y, directions, 0]

    stack = [enter(*START)]
    while stack:
        frame = stack[-1]
        x, y, directions, index = frame
        if index == len(directions):
            stack.pop()
            continue
        frame[3] = index + 1
        dx, dy = DIRECTIONS[directions[index]]
        nx, ny = x + 2 * dx, y + 2 * dy
        if maze.in_bounds(nx, ny) and not maze[ny][nx].visited:
            maze[y + dy][x + dx].is_wall = False
            stack.append(enter(nx, ny))
    return maze


def _find_end(maze: Maze) -> Position:
    x, y = maze.width - 2, maze.height - 2
    if maze.is_open(x, y):
        return Position(x, y)
    for y in range(maze.height - 1, -1, -1):
        for x in range(maze.width - 1, -1, -1):
            if not maze[y][x].is_wall:
                return Position(x, y)
    raise GenerationFailed("Maze has no open cell to use as the end")


# ----------------------------------------------------------------------


@dataclass
class MazePuzzleRecord:
    id: str
    seed: str
    grid_size: Tuple[int, int]
    cell_size: int
    max_attempts: int
    maze_grid: List[List[int]]
    start: Tuple[int, int]
    end: Tuple[int, int]
    solution_program: List[str]
    puzzle_image_path: str
    solution_image_path: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "seed": self.seed,
            "grid_size": list(self.grid_size),
            "cell_size": self.cell_size,
            "max_attempts": self.max_attempts,
            "maze_grid": self.maze_grid,
            "start": list(self.start),
            "end": list(self.end),
            "solution_program": list(self.solution_program),
            "puzzle_image_path": self.puzzle_image_path,
            "solution_image_path": self.solution_image_path,
        }


class MazeGenerator(AbstractPuzzleGenerator[MazePuzzleRecord]):
    """Generate seeded maze puzzles together with their shortest solution program."""

    def __init__(
        self,
        output_dir: PathLike = "data/maze",
        *,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        cell_size: int = 32,
        seed: Optional[int] = None,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> None:
        _check_dimensions(width, height)
        super().__init__(output_dir)
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.max_attempts = max_attempts
        self._rng = random.Random(seed)

        self.puzzle_dir = self.output_dir / "puzzles"
        self.solution_dir = self.output_dir / "solutions"
        for directory in (self.puzzle_dir, self.solution_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def random_seed(self, length: int = 7) -> str:
        return "".join(self._rng.choice(_SEED_ALPHABET) for _ in range(length))

    def create_puzzle(
        self,
        *,
        seed: Optional[str] = None,
        puzzle_id: Optional[str] = None,
    ) -> MazePuzzleRecord:
        puzzle_uuid = puzzle_id or str(uuid.uuid4())
        maze_seed = seed if seed is not None else self.random_seed()
        generated = generate_maze(self.width, self.height, maze_seed, max_attempts=self.max_attempts)
        maze, start, end = generated

        program = solve(maze, start, end)
        if program is None:
            raise RuntimeError(f"Maze for seed {maze_seed!r} has no path from start to end")
        path = execute(maze, start, end, program).path

        puzzle_image = render_maze(maze, start=start, end=end, cell_size=self.cell_size)
        solution_image = render_maze(
            maze,
            start=start,
            end=end,
            cell_size=self.cell_size,
            path=path,
            character=end,
        )

        puzzle_path = self.puzzle_dir / f"{puzzle_uuid}_puzzle.png"
        solution_path = self.solution_dir / f"{puzzle_uuid}_solution.png"
        puzzle_image.save(puzzle_path)
        solution_image.save(solution_path)
        logger.info("Created maze puzzle %s (seed %r, %d-step solution)", puzzle_uuid, maze_seed, len(program))

        return MazePuzzleRecord(
            id=puzzle_uuid,
            seed=maze_seed,
            grid_size=(self.width, self.height),
            cell_size=self.cell_size,
            max_attempts=self.max_attempts,
            maze_grid=maze.to_grid(),
            start=tuple(start),
            end=tuple(end),
            solution_program=[direction.value for direction in program],
            puzzle_image_path=self.relativize_path(puzzle_path),
            solution_image_path=self.relativize_path(solution_path),
        )


__all__ = [
    "GeneratedMaze",
    "MazeGenerator",
    "MazePuzzleRecord",
    "generate_maze",
    "is_structurally_valid",
    "solve",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "MAX_ATTEMPTS",
]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate seeded maze programming puzzles")
    parser.add_argument("count", type=int, nargs="?", default=None, help="Number of random puzzles to generate")
    parser.add_argument("--seeds", nargs="+", default=None, help="Explicit maze seeds, one puzzle each")
    parser.add_argument("--output-dir", type=Path, default=Path("data/maze"), help="Where to save assets")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    parser.add_argument("--cell-size", type=int, default=32)
    parser.add_argument("--seed", type=int, default=None, help="Seed for choosing maze seeds")
    parser.add_argument("--max-attempts", type=int, default=MAX_ATTEMPTS)
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    generator = MazeGenerator(
        output_dir=args.output_dir,
        width=args.width,
        height=args.height,
        cell_size=args.cell_size,
        seed=args.seed,
        max_attempts=args.max_attempts,
    )
    metadata_path = generator.output_dir / "puzzles.json"
    if args.count is None and args.seeds is None:
        raise SystemExit("Provide a puzzle count or --seeds")
    generator.generate_dataset(args.count, seeds=args.seeds, metadata_path=metadata_path)


if __name__ == "__main__":
    main()
