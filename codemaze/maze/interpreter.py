"""Replay an instruction sequence through a maze and classify the outcome."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .grid import DIRECTIONS, Direction, Maze, Position

Instruction = Union[Direction, str]

MOVED = "moved"
BLOCKED = "blocked"
REACHED = "reached"


@dataclass(frozen=True)
class Success:
    path: Tuple[Position, ...]

    status = "success"

    def to_dict(self) -> dict:
        return {"status": self.status, "path": [list(p) for p in self.path]}


@dataclass(frozen=True)
class Blocked:
    path: Tuple[Position, ...]
    failed_step: int

    status = "blocked"

    @property
    def position(self) -> Position:
        return self.path[-1]

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "path": [list(p) for p in self.path],
            "failed_step": self.failed_step,
        }


@dataclass(frozen=True)
class Exhausted:
    path: Tuple[Position, ...]

    status = "exhausted"

    def to_dict(self) -> dict:
        return {"status": self.status, "path": [list(p) for p in self.path]}


ExecutionResult = Union[Success, Blocked, Exhausted]


@dataclass(frozen=True)
class StepEvent:
    index: int
    direction: Direction
    position: Position
    status: str


def is_valid_move(maze: Maze, from_position: Position, direction: Instruction) -> bool:
    dx, dy = DIRECTIONS[Direction.coerce(direction)]
    x, y = from_position[0] + dx, from_position[1] + dy
    if not maze.in_bounds(x, y):
        return False
    return not maze[y][x].is_wall


def move(from_position: Position, direction: Instruction) -> Position:
    """Displace ``from_position`` by one cell; no wall or bounds checks."""

    dx, dy = DIRECTIONS[Direction.coerce(direction)]
    return Position(from_position[0] + dx, from_position[1] + dy)


def step(maze: Maze, position: Position, direction: Instruction) -> Optional[Position]:
    """Single-step evaluation for callers that pace execution themselves.

    Returns the new position, or ``None`` when the move is blocked.
    """

    if not is_valid_move(maze, position, direction):
        return None
    return move(position, direction)


def iter_steps(
    maze: Maze,
    start: Position,
    end: Position,
    program: Iterable[Instruction],
) -> Iterator[StepEvent]:
    """Yield one event per attempted instruction, stopping like :func:`execute`."""

    current = Position(*start)
    end = Position(*end)
    for index, instruction in enumerate(program):
        direction = Direction.coerce(instruction)
        target = step(maze, current, direction)
        if target is None:
            yield StepEvent(index, direction, current, BLOCKED)
            return
        current = target
        if current == end:
            yield StepEvent(index, direction, current, REACHED)
            return
        yield StepEvent(index, direction, current, MOVED)


def execute(
    maze: Maze,
    start: Position,
    end: Position,
    program: Iterable[Instruction],
) -> ExecutionResult:
    """Run ``program`` from ``start``.

    The first blocked instruction stops execution; reaching ``end`` stops it
    too, ignoring any trailing instructions. A program that runs out first
    is reported as :class:`Exhausted`.
    """

    start = Position(*start)
    path: List[Position] = [start]
    for event in iter_steps(maze, start, end, program):
        if event.status == BLOCKED:
            return Blocked(tuple(path), event.index)
        path.append(event.position)
        if event.status == REACHED:
            return Success(tuple(path))
    return Exhausted(tuple(path))


__all__ = [
    "ExecutionResult",
    "Success",
    "Blocked",
    "Exhausted",
    "StepEvent",
    "Instruction",
    "is_valid_move",
    "move",
    "step",
    "iter_steps",
    "execute",
]
