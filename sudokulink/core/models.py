"""Data models for puzzle state snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .constants import EMPTY, Cell, Digit, Grid, Unit


@dataclass
class PuzzleState:
    """Everything needed to resume a puzzle.

    ``puzzle`` holds the given digits, ``answer`` the digits typed by the
    user and ``work`` one candidate bitmask per cell. A freshly generated or
    cleared state may carry empty ``answer``/``work`` lists; missing entries
    read as empty.
    """

    puzzle: Grid = field(default_factory=list)
    answer: Grid = field(default_factory=list)
    work: List[int] = field(default_factory=list)
    seed: int = 0
    gentime: int = 0
    elapsed: int = 0

    def answer_at(self, pos: int) -> Cell:
        return self.answer[pos] if pos < len(self.answer) else EMPTY

    def work_at(self, pos: int) -> int:
        return self.work[pos] if pos < len(self.work) else 0

    def is_given(self, pos: int) -> bool:
        return pos < len(self.puzzle) and self.puzzle[pos] is not EMPTY

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "puzzle": [_cell_to_json(cell) for cell in self.puzzle],
            "answer": [_cell_to_json(cell) for cell in self.answer],
            "work": list(self.work),
            "seed": self.seed,
            "gentime": self.gentime,
            "elapsed": self.elapsed,
        }

    @classmethod
    def from_jsonable(cls, data: Any) -> "PuzzleState":
        """Rebuild a state from :meth:`to_jsonable` output.

        Raises ``TypeError``/``ValueError`` when ``data`` does not have the
        expected shape.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
        work = data.get("work") or []
        if not isinstance(work, list) or not all(isinstance(v, int) for v in work):
            raise TypeError("work must be a list of integers")
        return cls(
            puzzle=_grid_from_json(data.get("puzzle") or []),
            answer=_grid_from_json(data.get("answer") or []),
            work=list(work),
            seed=_int_from_json(data, "seed"),
            gentime=_int_from_json(data, "gentime"),
            elapsed=_int_from_json(data, "elapsed"),
        )


def _cell_to_json(cell: Cell) -> Optional[int]:
    return None if cell is EMPTY else cell.value


def _int_from_json(data: Dict[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    # json.loads also yields floats, including Infinity and NaN.
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key} must be an integer, got {value!r}")
    return value


def _grid_from_json(values: Any) -> Grid:
    if not isinstance(values, list):
        raise TypeError("grid must be a list")
    grid: Grid = []
    for value in values:
        if value is None:
            grid.append(EMPTY)
        elif isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            grid.append(Digit(value))
        else:
            raise TypeError(f"Invalid grid cell {value!r}")
    return grid


@dataclass(frozen=True)
class Conflict:
    """A unit holding the same digit more than once."""

    unit: Unit
    index: int
    digit: int
    positions: Tuple[int, ...]


class CheckOutcome(str, Enum):
    """Result of checking the board so far."""

    VICTORY = "VICTORY"
    OK = "OK"
    ERRORS = "ERRORS"
