import io
import unittest

from sudokulink.core.constants import Digit
from sudokulink.core.models import PuzzleState
from sudokulink.utils.pretty import TextRenderer, cell_symbol, format_elapsed, format_grid

from boards import PUZZLE


class FormatElapsedTests(unittest.TestCase):
    def test_minutes_and_seconds(self) -> None:
        self.assertEqual(format_elapsed(0), "0:00")
        self.assertEqual(format_elapsed(999), "0:00")
        self.assertEqual(format_elapsed(61_000), "1:01")

    def test_hours(self) -> None:
        self.assertEqual(format_elapsed(3_661_000), "1:01:01")

    def test_negative_is_a_dash(self) -> None:
        self.assertEqual(format_elapsed(-1), "-")


class GridTests(unittest.TestCase):
    def setUp(self) -> None:
        work = [0] * 16
        work[1] = 0b101
        self.state = PuzzleState(puzzle=list(PUZZLE), answer=[Digit(0)], work=work, seed=5)

    def test_cell_symbols(self) -> None:
        self.assertEqual(cell_symbol(self.state, 2), "[3]")
        self.assertEqual(cell_symbol(self.state, 0), " 1 ")
        self.assertEqual(cell_symbol(self.state, 1), " ~ ")
        self.assertEqual(cell_symbol(self.state, 5), " . ")

    def test_grid_has_a_row_per_line_plus_header_and_divider(self) -> None:
        lines = format_grid(self.state).splitlines()
        self.assertEqual(len(lines), 6)
        self.assertIn("[3]", lines[1])
        self.assertTrue(set(lines[3].strip()) == {"-"})


class TextRendererTests(unittest.TestCase):
    def setUp(self) -> None:
        self.stream = io.StringIO()
        self.renderer = TextRenderer(stream=self.stream)

    def test_full_redraw_has_title_and_grid(self) -> None:
        self.renderer.on_state_changed(PuzzleState(puzzle=list(PUZZLE), seed=5), None)
        output = self.stream.getvalue()
        self.assertTrue(output.startswith("Puzzle #5\n"))
        self.assertIn("[4]", output)

    def test_custom_puzzle_title(self) -> None:
        self.renderer.on_state_changed(PuzzleState(puzzle=list(PUZZLE), seed=0), None)
        self.assertTrue(self.stream.getvalue().startswith("Custom Puzzle\n"))

    def test_single_cell_update(self) -> None:
        work = [0] * 16
        work[1] = 0b101
        self.renderer.on_state_changed(PuzzleState(puzzle=list(PUZZLE), work=work, seed=5), 1)
        output = self.stream.getvalue()
        self.assertIn("cell (0,1)", output)
        self.assertIn("marks 13", output)

    def test_timer_lines(self) -> None:
        self.renderer.on_timer(61_000, True, False)
        self.renderer.on_timer(5_000, False, False)
        self.renderer.on_timer(90_000, True, True)
        self.assertEqual(self.stream.getvalue(), "Time 1:01\nFinished in 1:30\n")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
