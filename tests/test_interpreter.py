import unittest

from codemaze.maze.generator import generate_maze
from codemaze.maze.grid import DIRECTIONS, Direction, InvalidInstruction, Maze, Position
from codemaze.maze.interpreter import (
    Blocked,
    Exhausted,
    Success,
    execute,
    is_valid_move,
    iter_steps,
    move,
    step,
)

LAYOUT = [
    "#######",
    "#...#.#",
    "#.#.#.#",
    "#.#...#",
    "#######",
]

START = Position(1, 1)
UP, DOWN, LEFT, RIGHT = Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT


def build_maze(layout):
    return Maze.from_grid([[1 if char == "#" else 0 for char in row] for row in layout])


class MovePrimitiveTests(unittest.TestCase):
    def setUp(self) -> None:
        self.maze = build_maze(LAYOUT)

    def test_direction_vectors(self) -> None:
        self.assertEqual(DIRECTIONS[UP], (0, -1))
        self.assertEqual(DIRECTIONS[DOWN], (0, 1))
        self.assertEqual(DIRECTIONS[LEFT], (-1, 0))
        self.assertEqual(DIRECTIONS[RIGHT], (1, 0))

    def test_wall_blocks_move(self) -> None:
        self.assertFalse(is_valid_move(self.maze, START, UP))
        self.assertFalse(is_valid_move(self.maze, START, LEFT))
        self.assertTrue(is_valid_move(self.maze, START, RIGHT))
        self.assertTrue(is_valid_move(self.maze, START, DOWN))

    def test_out_of_bounds_is_invalid(self) -> None:
        maze = Maze.from_grid([[0, 0], [0, 1]])
        self.assertFalse(is_valid_move(maze, Position(0, 0), UP))
        self.assertFalse(is_valid_move(maze, Position(0, 0), LEFT))
        self.assertFalse(is_valid_move(maze, Position(1, 0), RIGHT))
        self.assertFalse(is_valid_move(maze, Position(0, 1), DOWN))
        self.assertTrue(is_valid_move(maze, Position(0, 0), RIGHT))

    def test_move_ignores_walls_and_bounds(self) -> None:
        self.assertEqual(move(Position(0, 0), UP), Position(0, -1))
        self.assertEqual(move(START, LEFT), Position(0, 1))
        self.assertEqual(move((3, 3), "right"), Position(4, 3))

    def test_step_returns_none_when_blocked(self) -> None:
        self.assertIsNone(step(self.maze, START, UP))
        self.assertEqual(step(self.maze, START, RIGHT), Position(2, 1))

    def test_unknown_direction_is_rejected(self) -> None:
        with self.assertRaises(InvalidInstruction):
            move(START, "north")

    def test_valid_moves_land_on_open_cells(self) -> None:
        maze = generate_maze(15, 15, "symmetry").maze
        for position in maze.open_cells():
            for direction in Direction:
                if is_valid_move(maze, position, direction):
                    target = move(position, direction)
                    self.assertFalse(maze[target.y][target.x].is_wall)


class ExecuteTests(unittest.TestCase):
    def setUp(self) -> None:
        self.maze = build_maze(LAYOUT)

    def test_first_blocked_instruction_stops_execution(self) -> None:
        result = execute(self.maze, START, Position(5, 1), [UP, RIGHT])
        self.assertIsInstance(result, Blocked)
        self.assertEqual(result.failed_step, 0)
        self.assertEqual(result.path, (START,))
        self.assertEqual(result.status, "blocked")

    def test_blocked_after_some_progress(self) -> None:
        result = execute(self.maze, START, Position(5, 1), [RIGHT, RIGHT, RIGHT, DOWN])
        self.assertIsInstance(result, Blocked)
        self.assertEqual(result.failed_step, 2)
        self.assertEqual(result.path, (START, Position(2, 1), Position(3, 1)))
        self.assertEqual(result.position, Position(3, 1))

    def test_reaching_end_ignores_trailing_instructions(self) -> None:
        result = execute(self.maze, START, Position(3, 1), [RIGHT, RIGHT, DOWN])
        self.assertIsInstance(result, Success)
        self.assertEqual(result.path, (Position(1, 1), Position(2, 1), Position(3, 1)))

    def test_full_route_succeeds(self) -> None:
        program = [RIGHT, RIGHT, DOWN, DOWN, RIGHT, RIGHT, UP, UP]
        result = execute(self.maze, START, Position(5, 1), program)
        self.assertIsInstance(result, Success)
        self.assertEqual(len(result.path), len(program) + 1)
        self.assertEqual(result.path[-1], Position(5, 1))

    def test_program_running_out_is_exhausted(self) -> None:
        program = [RIGHT, LEFT, DOWN]
        result = execute(self.maze, START, Position(5, 1), program)
        self.assertIsInstance(result, Exhausted)
        self.assertEqual(len(result.path), len(program) + 1)
        self.assertEqual(result.path[-1], Position(1, 2))

    def test_empty_program_is_exhausted_at_start(self) -> None:
        result = execute(self.maze, START, Position(5, 1), [])
        self.assertIsInstance(result, Exhausted)
        self.assertEqual(result.path, (START,))

    def test_goal_is_only_checked_after_a_move(self) -> None:
        for program in ([RIGHT, LEFT], [UP], []):
            with self.subTest(program=program):
                result = execute(self.maze, START, START, program)
                events = list(iter_steps(self.maze, START, START, program))
                self.assertEqual(len(result.path), 1 + sum(event.status != "blocked" for event in events))
                if events:
                    self.assertEqual(result.status, {"reached": "success", "blocked": "blocked"}[events[-1].status])

        round_trip = execute(self.maze, START, START, [RIGHT, LEFT])
        self.assertIsInstance(round_trip, Success)
        self.assertEqual(round_trip.path, (START, Position(2, 1), START))
        blocked = execute(self.maze, START, START, [UP])
        self.assertIsInstance(blocked, Blocked)
        self.assertEqual(blocked.failed_step, 0)
        self.assertIsInstance(execute(self.maze, START, START, []), Exhausted)

    def test_accepts_direction_names_and_tuples(self) -> None:
        result = execute(self.maze, (1, 1), (3, 1), ["right", "right"])
        self.assertIsInstance(result, Success)
        self.assertEqual(result.path[-1], Position(3, 1))

    def test_program_is_not_mutated(self) -> None:
        program = [RIGHT, RIGHT, DOWN]
        execute(self.maze, START, Position(3, 1), program)
        self.assertEqual(program, [RIGHT, RIGHT, DOWN])

    def test_results_serialize_to_dicts(self) -> None:
        blocked = execute(self.maze, START, Position(5, 1), [UP])
        self.assertEqual(blocked.to_dict(), {"status": "blocked", "path": [[1, 1]], "failed_step": 0})
        exhausted = execute(self.maze, START, Position(5, 1), [DOWN])
        self.assertEqual(exhausted.to_dict(), {"status": "exhausted", "path": [[1, 1], [1, 2]]})

    def test_fresh_execution_restarts_from_start(self) -> None:
        first = execute(self.maze, START, Position(5, 1), [DOWN, DOWN])
        second = execute(self.maze, START, Position(5, 1), [DOWN, DOWN])
        self.assertEqual(first, second)


class IterStepsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.maze = build_maze(LAYOUT)

    def test_events_follow_execution(self) -> None:
        events = list(iter_steps(self.maze, START, Position(3, 1), [RIGHT, RIGHT, DOWN]))
        self.assertEqual([event.status for event in events], ["moved", "reached"])
        self.assertEqual([event.index for event in events], [0, 1])
        self.assertEqual(events[-1].position, Position(3, 1))

    def test_blocked_event_keeps_current_position(self) -> None:
        events = list(iter_steps(self.maze, START, Position(5, 1), [DOWN, RIGHT, DOWN]))
        self.assertEqual([event.status for event in events], ["moved", "blocked"])
        self.assertEqual(events[-1].position, Position(1, 2))
        self.assertEqual(events[-1].direction, RIGHT)

    def test_events_are_produced_lazily(self) -> None:
        events = iter_steps(self.maze, START, Position(5, 1), [RIGHT, "bogus"])
        self.assertEqual(next(events).position, Position(2, 1))
        with self.assertRaises(InvalidInstruction):
            next(events)


if __name__ == "__main__":
    unittest.main()
