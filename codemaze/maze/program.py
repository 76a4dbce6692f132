"""Parsing, editing and describing instruction sequences."""

from __future__ import annotations

import re
from typing import Dict, Iterable, Sequence, Tuple

from .grid import Direction, InvalidInstruction
from .interpreter import Blocked, ExecutionResult, Exhausted, Instruction, Success

Program = Tuple[Direction, ...]

_ALIASES: Dict[str, Direction] = {
    "u": Direction.UP,
    "d": Direction.DOWN,
    "l": Direction.LEFT,
    "r": Direction.RIGHT,
    "↑": Direction.UP,
    "↓": Direction.DOWN,
    "←": Direction.LEFT,
    "→": Direction.RIGHT,
}
for _direction in Direction:
    _ALIASES[_direction.value] = _direction

_SEPARATORS = re.compile(r"[\s,;]+")
_COMPACT = re.compile(r"^[udlr←↑→↓]+$")


def _lookup(token: str) -> Direction:
    try:
        return _ALIASES[token.lower()]
    except KeyError as exc:
        raise InvalidInstruction(f"Unknown instruction: {token!r}") from exc


def parse_program(text: str) -> Program:
    """Parse ``"up, right"``, ``"u r"``, ``"UR"`` or ``"↑→"`` into directions."""

    program = []
    for token in _SEPARATORS.split(text.strip()):
        if not token:
            continue
        if token.lower() not in _ALIASES and _COMPACT.match(token.lower()):
            program.extend(_lookup(char) for char in token)
        else:
            program.append(_lookup(token))
    return tuple(program)


def to_program(instructions: Iterable[Instruction]) -> Program:
    return tuple(Direction.coerce(item) for item in instructions)


def format_program(program: Iterable[Instruction]) -> str:
    return ", ".join(direction.value for direction in to_program(program))


def append_instruction(program: Sequence[Instruction], direction: Instruction) -> Program:
    return to_program(program) + (Direction.coerce(direction),)


def remove_instruction(program: Sequence[Instruction], index: int) -> Program:
    items = list(to_program(program))
    if not 0 <= index < len(items):
        raise IndexError(f"Instruction index {index} out of range for program of length {len(items)}")
    del items[index]
    return tuple(items)


def reorder_instruction(program: Sequence[Instruction], from_index: int, to_index: int) -> Program:
    """Move one instruction to a new slot, shifting the ones in between."""

    items = list(to_program(program))
    for index in (from_index, to_index):
        if not 0 <= index < len(items):
            raise IndexError(f"Instruction index {index} out of range for program of length {len(items)}")
    items.insert(to_index, items.pop(from_index))
    return tuple(items)


def describe_result(result: ExecutionResult, program: Sequence[Instruction] = ()) -> str:
    if isinstance(result, Success):
        return "You've reached the goal!"
    if isinstance(result, Blocked):
        x, y = result.position
        if result.failed_step < len(program):
            direction = Direction.coerce(program[result.failed_step]).value
            return (
                f"Can't move {direction} from ({x}, {y}). "
                f"Program stopped at step {result.failed_step + 1}."
            )
        return f"Blocked at ({x}, {y}). Program stopped at step {result.failed_step + 1}."
    if isinstance(result, Exhausted):
        return "Program finished without reaching the goal."
    raise TypeError(f"Unsupported execution result: {result!r}")


__all__ = [
    "Program",
    "parse_program",
    "to_program",
    "format_program",
    "append_instruction",
    "remove_instruction",
    "reorder_instruction",
    "describe_result",
]
