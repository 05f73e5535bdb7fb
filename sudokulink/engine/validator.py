"""Deterministic rule checks over a (partially) filled board."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Sequence

from ..core.constants import DEFAULT_BOX_SIZE, EMPTY, Cell, Dimensions, Grid, Unit
from ..core.models import Conflict, PuzzleState


def merged_grid(state: PuzzleState, box_size: int = DEFAULT_BOX_SIZE) -> Grid:
    """Overlay answers onto the givens; given cells take priority."""
    dims = Dimensions(box=box_size)
    board: Grid = []
    for pos in range(dims.cells):
        given = state.puzzle[pos] if pos < len(state.puzzle) else EMPTY
        board.append(given if given is not EMPTY else state.answer_at(pos))
    return board


def count_filled(board: Sequence[Cell]) -> int:
    return sum(1 for cell in board if cell is not EMPTY)


def find_conflicts(board: Sequence[Cell], box_size: int = DEFAULT_BOX_SIZE) -> List[Conflict]:
    """Return one :class:`Conflict` per unit and digit that repeats."""
    dims = Dimensions(box=box_size)
    units = (
        (Unit.ROW, dims.row_of),
        (Unit.COLUMN, dims.col_of),
        (Unit.BOX, dims.box_of),
    )
    conflicts: List[Conflict] = []
    for unit, index_of in units:
        seen: Dict[tuple, List[int]] = defaultdict(list)
        for pos in range(min(len(board), dims.cells)):
            cell = board[pos]
            if cell is EMPTY:
                continue
            seen[(index_of(pos), cell.value)].append(pos)
        for (index, digit), positions in sorted(seen.items()):
            if len(positions) > 1:
                conflicts.append(
                    Conflict(unit=unit, index=index, digit=digit, positions=tuple(positions))
                )
    return conflicts


def is_solved(state: PuzzleState, box_size: int = DEFAULT_BOX_SIZE) -> bool:
    board = merged_grid(state, box_size)
    if count_filled(board) != Dimensions(box=box_size).cells:
        return False
    return not find_conflicts(board, box_size)
