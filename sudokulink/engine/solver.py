"""CP-SAT sudoku solving and seeded puzzle generation using OR-Tools."""

from __future__ import annotations

import random
from typing import List, Optional, Sequence, Tuple

from ortools.sat.python import cp_model

from ..core.constants import DEFAULT_BOX_SIZE, EMPTY, Cell, Digit, Dimensions, Grid
from ..core.exceptions import GenerationError
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class _SolutionCounter(cp_model.CpSolverSolutionCallback):
    """Counts solutions and stops the search once ``limit`` is reached."""

    def __init__(self, limit: int) -> None:
        super().__init__()
        self.limit = limit
        self.count = 0

    def on_solution_callback(self) -> None:
        self.count += 1
        if self.count >= self.limit:
            self.stop_search()


def _build_model(board: Sequence[Cell], dims: Dimensions) -> Optional[Tuple[cp_model.CpModel, list]]:
    """Return the model and its cell variables, or None if a given is out of range."""
    model = cp_model.CpModel()
    cells = [model.new_int_var(0, dims.side - 1, f"C_{pos}") for pos in range(dims.cells)]

    for pos, cell in enumerate(board[: dims.cells]):
        if cell is EMPTY:
            continue
        if not 0 <= cell.value < dims.side:
            return None
        model.add(cells[pos] == cell.value)

    for index in range(dims.side):
        model.add_all_different([cells[p] for p in range(dims.cells) if dims.row_of(p) == index])
        model.add_all_different([cells[p] for p in range(dims.cells) if dims.col_of(p) == index])
        model.add_all_different([cells[p] for p in range(dims.cells) if dims.box_of(p) == index])
    return model, cells


def count_solutions(
    board: Sequence[Cell],
    box_size: int = DEFAULT_BOX_SIZE,
    limit: int = 2,
    timeout: float = 10.0,
) -> int:
    """Count completions of ``board``, stopping once ``limit`` are found."""
    dims = Dimensions(box=box_size)
    built = _build_model(board, dims)
    if built is None:
        return 0
    model, _cells = built

    solver = cp_model.CpSolver()
    solver.parameters.enumerate_all_solutions = True
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = 1
    counter = _SolutionCounter(limit)
    solver.solve(model, counter)
    return counter.count


def solve(board: Sequence[Cell], box_size: int = DEFAULT_BOX_SIZE, timeout: float = 10.0) -> Optional[Grid]:
    """Return one completion of ``board`` or None if there is none."""
    dims = Dimensions(box=box_size)
    built = _build_model(board, dims)
    if built is None:
        return None
    model, cells = built

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = 1
    status = solver.solve(model)
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        return None
    return [Digit(int(solver.value(var))) for var in cells]


class SudokuGenerator:
    """Builds puzzles with a unique solution, deterministically per seed."""

    def __init__(self, box_size: int = DEFAULT_BOX_SIZE) -> None:
        self.dims = Dimensions(box=box_size)

    def generate(self, seed: int, quick: bool = False, symmetric: bool = False) -> Grid:
        """Return the given digits for puzzle ``seed``.

        Givens are removed one cell at a time (or in 180-degree pairs when
        ``symmetric``) as long as the solution stays unique. ``quick`` stops
        at the first removal that would break uniqueness instead of trying
        every cell.
        """
        rng = random.Random(seed)
        board = self._random_solution(rng)

        order = list(range(self.dims.cells))
        rng.shuffle(order)
        removed = set()
        for pos in order:
            if pos in removed:
                continue
            group = {pos}
            if symmetric:
                group.add(self.dims.cells - 1 - pos)
            saved = {p: board[p] for p in group}
            for p in group:
                board[p] = EMPTY
            if count_solutions(board, self.dims.box) == 1:
                removed.update(group)
                continue
            for p, cell in saved.items():
                board[p] = cell
            if quick:
                break

        LOGGER.debug(
            "Generated puzzle seed=%s givens=%d quick=%s symmetric=%s",
            seed, self.dims.cells - len(removed), quick, symmetric,
        )
        return board

    def _random_solution(self, rng: random.Random) -> Grid:
        base = solve([EMPTY] * self.dims.cells, self.dims.box)
        if base is None:
            raise GenerationError(f"No solution for an empty {self.dims.side}x{self.dims.side} board")

        box, side = self.dims.box, self.dims.side
        digits = list(range(side))
        rng.shuffle(digits)
        rows = self._shuffled_lines(rng, box)
        cols = self._shuffled_lines(rng, box)
        transpose = rng.random() < 0.5

        board: Grid = []
        for r in range(side):
            for c in range(side):
                src_r, src_c = rows[r], cols[c]
                if transpose:
                    src_r, src_c = src_c, src_r
                board.append(Digit(digits[base[src_r * side + src_c].value]))
        return board

    @staticmethod
    def _shuffled_lines(rng: random.Random, box: int) -> List[int]:
        """Permute bands, then lines within each band; both keep the board valid."""
        bands = list(range(box))
        rng.shuffle(bands)
        lines: List[int] = []
        for band in bands:
            inner = list(range(box))
            rng.shuffle(inner)
            lines.extend(band * box + i for i in inner)
        return lines
