"""Shared constants and cell types for the puzzle state layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Union


DEFAULT_BOX_SIZE = 2

# Seeds outside this range wrap back to the first puzzle on navigation.
MIN_SEED = 1
MAX_SEED = 1_000_000_000

# Alphabet for the two-character work-mark encoding (6 bits per character).
BASE64_CHARS = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "0123456789"
    "-_"
)

TICK_MS = 1000


class Empty(str, Enum):
    """Marker for a cell that holds no digit."""

    EMPTY = "EMPTY"


EMPTY = Empty.EMPTY


@dataclass(frozen=True)
class Digit:
    """A zero-based digit placed in a cell (``Digit(0)`` is shown as "1")."""

    value: int

    def __str__(self) -> str:
        return str(self.value + 1)


Cell = Union[Digit, Empty]
Grid = List[Cell]


class Unit(str, Enum):
    """Groups of cells that must hold distinct digits."""

    ROW = "ROW"
    COLUMN = "COLUMN"
    BOX = "BOX"


@dataclass(frozen=True)
class Dimensions:
    """Board geometry derived from the box size B (N = B*B, S = N*N)."""

    box: int = DEFAULT_BOX_SIZE

    @property
    def side(self) -> int:
        return self.box * self.box

    @property
    def cells(self) -> int:
        return self.side * self.side

    def contains(self, pos: int) -> bool:
        return 0 <= pos < self.cells

    def row_of(self, pos: int) -> int:
        return pos // self.side

    def col_of(self, pos: int) -> int:
        return pos % self.side

    def box_of(self, pos: int) -> int:
        row, col = self.row_of(pos), self.col_of(pos)
        return (row // self.box) * self.box + col // self.box
