"""Seeded maze generation and movement-program execution."""

__all__ = [
    "SeededRandom",
    "seed_random",
    "Cell",
    "Maze",
    "Position",
    "Direction",
    "DIRECTIONS",
    "MazeError",
    "InvalidDimensions",
    "GenerationFailed",
    "InvalidInstruction",
    "GeneratedMaze",
    "generate_maze",
    "is_structurally_valid",
    "solve",
    "MazeGenerator",
    "MazePuzzleRecord",
    "ExecutionResult",
    "Success",
    "Blocked",
    "Exhausted",
    "StepEvent",
    "is_valid_move",
    "move",
    "step",
    "iter_steps",
    "execute",
    "parse_program",
    "format_program",
    "describe_result",
    "render_maze",
    "MazeProgramEvaluator",
    "MazeEvaluationResult",
]

from .rng import SeededRandom, seed_random
from .grid import (
    Cell,
    Maze,
    Position,
    Direction,
    DIRECTIONS,
    MazeError,
    InvalidDimensions,
    GenerationFailed,
    InvalidInstruction,
)
from .interpreter import (
    ExecutionResult,
    Success,
    Blocked,
    Exhausted,
    StepEvent,
    is_valid_move,
    move,
    step,
    iter_steps,
    execute,
)
from .program import parse_program, format_program, describe_result
from .render import render_maze
from .generator import GeneratedMaze, MazeGenerator, MazePuzzleRecord, generate_maze, is_structurally_valid, solve
from .evaluator import MazeProgramEvaluator, MazeEvaluationResult
