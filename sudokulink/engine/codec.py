"""Compact scalar encoding of puzzle state for the shareable identifier.

Grids become one character per cell (``'0'`` for empty, ``'1'`` for the
first digit and so on). Work marks become two base-64 characters per cell
with trailing zero cells dropped. Decoding never fails: short input is
padded, long input is truncated and unknown characters map to whatever
value they happen to produce.
"""

from __future__ import annotations

from typing import Dict, Mapping, Sequence

from ..core.constants import BASE64_CHARS, DEFAULT_BOX_SIZE, EMPTY, Digit, Dimensions, Grid
from ..core.models import PuzzleState
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

_ZERO = ord("0")


class ScalarCodec:
    """Converts between :class:`PuzzleState` and flat string mappings."""

    def __init__(self, box_size: int = DEFAULT_BOX_SIZE) -> None:
        self.dims = Dimensions(box=box_size)

    # ------------------------------------------------------------------
    # Grids
    # ------------------------------------------------------------------

    def encode_grid(self, grid: Sequence) -> str:
        if not grid:
            return ""
        return "".join("0" if cell is EMPTY else chr(_ZERO + cell.value + 1) for cell in grid)

    def decode_grid(self, text: str) -> Grid:
        grid: Grid = []
        for ch in text[: self.dims.cells]:
            num = ord(ch) - _ZERO
            grid.append(EMPTY if num == 0 else Digit(num - 1))
        grid.extend([EMPTY] * (self.dims.cells - len(grid)))
        return grid

    # ------------------------------------------------------------------
    # Work marks
    # ------------------------------------------------------------------

    def encode_marks(self, marks: Sequence[int]) -> str:
        end = len(marks)
        while end > 0 and not marks[end - 1]:
            end -= 1
        return "".join(_short_to_base64(value) for value in marks[:end])

    def decode_marks(self, text: str) -> list:
        marks = []
        for index in range(0, len(text) - 1, 2):
            if len(marks) == self.dims.cells:
                break
            marks.append(_base64_to_short(text, index))
        marks.extend([0] * (self.dims.cells - len(marks)))
        return marks

    # ------------------------------------------------------------------
    # Whole state
    # ------------------------------------------------------------------

    def encode_state(self, state: PuzzleState) -> Dict[str, str]:
        return {
            "puzzle": self.encode_grid(state.puzzle),
            "answer": self.encode_grid(state.answer),
            "work": self.encode_marks(state.work),
            "seed": str(state.seed),
            "gentime": str(state.gentime),
            "elapsed": str(state.elapsed),
            "size": str(self.dims.box),
        }

    def decode_state(self, data: Mapping[str, str]) -> PuzzleState:
        if "size" in data and data["size"] != str(self.dims.box):
            LOGGER.debug("Discarding identifier for size %r (expected %s)", data["size"], self.dims.box)
            data = {}
        return PuzzleState(
            puzzle=self.decode_grid(data.get("puzzle", "")),
            answer=self.decode_grid(data.get("answer", "")),
            work=self.decode_marks(data.get("work", "")),
            seed=_parse_int(data.get("seed")),
            gentime=_parse_int(data.get("gentime")),
            elapsed=_parse_int(data.get("elapsed")),
        )


def _short_to_base64(value: int) -> str:
    return BASE64_CHARS[(value >> 6) & 63] + BASE64_CHARS[value & 63]


def _base64_to_short(text: str, index: int) -> int:
    return (BASE64_CHARS.find(text[index]) << 6) + BASE64_CHARS.find(text[index + 1])


def _parse_int(value) -> int:
    if value is None:
        return 0
    try:
        return int(str(value).strip())
    except ValueError:
        LOGGER.debug("Ignoring non-numeric identifier value %r", value)
        return 0
