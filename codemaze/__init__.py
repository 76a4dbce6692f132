"""Seeded maze puzzles solved by programming a character's moves."""

__all__ = [
    "AbstractPuzzleGenerator",
    "AbstractPuzzleEvaluator",
    "Direction",
    "Maze",
    "Position",
    "generate_maze",
    "execute",
    "MazeGenerator",
    "MazeProgramEvaluator",
    "MazePuzzleRecord",
    "MazeEvaluationResult",
]

from .base import AbstractPuzzleGenerator, AbstractPuzzleEvaluator
from .maze import (
    Direction,
    Maze,
    Position,
    generate_maze,
    execute,
    MazeGenerator,
    MazeProgramEvaluator,
    MazePuzzleRecord,
    MazeEvaluationResult,
)
