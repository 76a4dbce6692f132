"""Replay candidate programs against stored maze puzzle records."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from ..base import AbstractPuzzleEvaluator, PathLike
from .generator import MAX_ATTEMPTS, generate_maze
from .grid import Maze, Position
from .interpreter import Blocked, Instruction, execute
from .program import describe_result, parse_program, to_program
from .render import render_maze

logger = logging.getLogger(__name__)


@dataclass
class MazeEvaluationResult:
    puzzle_id: str
    status: str
    path: List[Tuple[int, int]]
    failed_step: Optional[int]
    steps_used: int
    program_length: int
    optimal_steps: Optional[int]
    message: str

    @property
    def solved(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> dict:
        return {
            "puzzle_id": self.puzzle_id,
            "status": self.status,
            "solved": self.solved,
            "path": [list(position) for position in self.path],
            "failed_step": self.failed_step,
            "steps_used": self.steps_used,
            "program_length": self.program_length,
            "optimal_steps": self.optimal_steps,
            "message": self.message,
        }


class MazeProgramEvaluator(AbstractPuzzleEvaluator[MazeEvaluationResult]):
    """Run a player's program through the maze described by a puzzle record."""

    required_fields = ("id", "seed", "grid_size", "maze_grid", "start", "end")

    def load_maze(self, puzzle_id: str, *, verify_seed: bool = True) -> Tuple[Maze, Position, Position]:
        record = self.get_record(puzzle_id)
        maze = Maze.from_grid(record["maze_grid"])
        start = Position(*map(int, record["start"]))
        end = Position(*map(int, record["end"]))
        if verify_seed:
            width, height = map(int, record["grid_size"])
            max_attempts = int(record.get("max_attempts", MAX_ATTEMPTS))
            regenerated = generate_maze(width, height, str(record["seed"]), max_attempts=max_attempts)
            if regenerated.maze != maze or (regenerated.start, regenerated.end) != (start, end):
                raise ValueError(
                    f"Puzzle '{puzzle_id}' does not match the maze regenerated from seed {record['seed']!r}"
                )
        return maze, start, end

    def evaluate(
        self,
        puzzle_id: str,
        program: Union[str, Sequence[Instruction]],
        *,
        verify_seed: bool = True,
        render_path: Optional[PathLike] = None,
        cell_size: Optional[int] = None,
    ) -> MazeEvaluationResult:
        record = self.get_record(puzzle_id)
        maze, start, end = self.load_maze(puzzle_id, verify_seed=verify_seed)
        instructions = parse_program(program) if isinstance(program, str) else to_program(program)

        result = execute(maze, start, end, instructions)
        steps_used = len(result.path) - 1
        solution = record.get("solution_program")
        optimal_steps = len(solution) if solution is not None else None
        logger.debug("Puzzle %s: %s after %d steps", puzzle_id, result.status, steps_used)

        if render_path is not None:
            target = self.resolve_path(render_path)
            target.parent.mkdir(parents=True, exist_ok=True)
            image = render_maze(
                maze,
                start=start,
                end=end,
                cell_size=cell_size or int(record.get("cell_size", 32)),
                path=result.path,
                character=result.path[-1],
            )
            image.save(target)

        return MazeEvaluationResult(
            puzzle_id=puzzle_id,
            status=result.status,
            path=[tuple(position) for position in result.path],
            failed_step=result.failed_step if isinstance(result, Blocked) else None,
            steps_used=steps_used,
            program_length=len(instructions),
            optimal_steps=optimal_steps,
            message=describe_result(result, instructions),
        )


__all__ = ["MazeProgramEvaluator", "MazeEvaluationResult"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate a movement program against a maze puzzle")
    parser.add_argument("metadata", type=Path, help="Path to maze puzzles metadata JSON")
    parser.add_argument("puzzle_id", type=str, help="Identifier of the puzzle to evaluate")
    parser.add_argument("program", type=str, help='Program such as "right, right, down" or "RRD"')
    parser.add_argument("--base-dir", type=Path, default=None)
    parser.add_argument("--render", type=Path, default=None, help="Save an image of the executed trail")
    parser.add_argument("--no-verify-seed", action="store_true", help="Trust the stored grid without regenerating it")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    evaluator = MazeProgramEvaluator(args.metadata, base_dir=args.base_dir)
    result = evaluator.evaluate(
        args.puzzle_id,
        args.program,
        verify_seed=not args.no_verify_seed,
        render_path=args.render,
    )
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
