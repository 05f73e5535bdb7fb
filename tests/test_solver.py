import unittest

from sudokulink.core.constants import EMPTY, Digit
from sudokulink.engine.solver import SudokuGenerator, count_solutions, solve
from sudokulink.engine.validator import find_conflicts

from boards import PUZZLE, SOLUTION


class SolveTests(unittest.TestCase):
    def test_solve_completes_puzzle(self) -> None:
        self.assertEqual(solve(PUZZLE), SOLUTION)

    def test_solve_reports_contradiction(self) -> None:
        board = list(PUZZLE)
        board[1] = Digit(0)
        self.assertIsNone(solve(board))

    def test_out_of_range_given_is_unsolvable(self) -> None:
        board = [EMPTY] * 16
        board[0] = Digit(7)
        self.assertIsNone(solve(board))
        self.assertEqual(count_solutions(board), 0)

    def test_count_solutions_stops_at_limit(self) -> None:
        self.assertEqual(count_solutions([EMPTY] * 16, limit=2), 2)
        self.assertEqual(count_solutions(PUZZLE), 1)


class GeneratorTests(unittest.TestCase):
    def test_generated_puzzle_has_unique_solution(self) -> None:
        puzzle = SudokuGenerator().generate(5)
        self.assertEqual(len(puzzle), 16)
        self.assertEqual(find_conflicts(puzzle), [])
        self.assertEqual(count_solutions(puzzle), 1)
        self.assertIn(EMPTY, puzzle)

    def test_same_seed_same_puzzle(self) -> None:
        generator = SudokuGenerator()
        self.assertEqual(generator.generate(11), generator.generate(11))

    def test_symmetric_puzzle_mirrors_givens(self) -> None:
        puzzle = SudokuGenerator().generate(3, symmetric=True)
        for pos in range(16):
            self.assertEqual(puzzle[pos] is EMPTY, puzzle[15 - pos] is EMPTY)
        self.assertEqual(count_solutions(puzzle), 1)

    def test_quick_keeps_at_least_as_many_givens(self) -> None:
        generator = SudokuGenerator()
        quick = generator.generate(8, quick=True)
        full = generator.generate(8)
        self.assertGreaterEqual(
            sum(cell is not EMPTY for cell in quick),
            sum(cell is not EMPTY for cell in full),
        )
        self.assertEqual(count_solutions(quick), 1)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
