"""Plain-text rendering of puzzle state."""

from __future__ import annotations

import sys
from typing import Optional

from ..core.constants import DEFAULT_BOX_SIZE, EMPTY, Dimensions
from ..core.models import PuzzleState


def format_elapsed(elapsed: int) -> str:
    """Format milliseconds as ``m:ss`` or ``h:mm:ss``; negative gives ``-``."""
    if elapsed < 0:
        return "-"
    seconds = elapsed // 1000
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def cell_symbol(state: PuzzleState, pos: int) -> str:
    if state.is_given(pos):
        return f"[{state.puzzle[pos]}]"
    answer = state.answer_at(pos)
    if answer is not EMPTY:
        return f" {answer} "
    if state.work_at(pos):
        return " ~ "
    return " . "


def format_marks(state: PuzzleState, pos: int, box_size: int = DEFAULT_BOX_SIZE) -> str:
    side = Dimensions(box=box_size).side
    mask = state.work_at(pos)
    return "".join(str(n + 1) for n in range(side) if mask & (1 << n))


def format_grid(state: PuzzleState, box_size: int = DEFAULT_BOX_SIZE) -> str:
    dims = Dimensions(box=box_size)
    header = "".join(
        f"{c:^3}" + (" " if c % dims.box == dims.box - 1 else "") for c in range(dims.side)
    )
    lines = ["    " + header.rstrip()]
    for r in range(dims.side):
        if r and r % dims.box == 0:
            lines.append("    " + "-" * len(header.rstrip()))
        parts = []
        for c in range(dims.side):
            parts.append(cell_symbol(state, r * dims.side + c))
            if c % dims.box == dims.box - 1 and c != dims.side - 1:
                parts.append("|")
        lines.append(f"{r:>2} |" + "".join(parts))
    return "\n".join(lines)


class TextRenderer:
    """Writes the board and timer to a text stream."""

    def __init__(self, box_size: int = DEFAULT_BOX_SIZE, stream=None) -> None:
        self.box_size = box_size
        self.stream = stream or sys.stdout

    def on_state_changed(self, state: PuzzleState, pos: Optional[int]) -> None:
        title = f"Puzzle #{state.seed}" if state.seed else "Custom Puzzle"
        if pos is not None:
            side = Dimensions(box=self.box_size).side
            marks = format_marks(state, pos, self.box_size)
            detail = f" marks {marks}" if marks else ""
            print(
                f"{title}: cell ({pos // side},{pos % side}) ={cell_symbol(state, pos)}{detail}",
                file=self.stream,
            )
            return
        print(title, file=self.stream)
        print(format_grid(state, self.box_size), file=self.stream)

    def on_timer(self, elapsed: int, visible: bool, finished: bool) -> None:
        if not visible:
            return
        label = "Finished in" if finished else "Time"
        print(f"{label} {format_elapsed(elapsed)}", file=self.stream)
