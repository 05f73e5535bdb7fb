"""Shared 4x4 boards for the test modules."""

from sudokulink.core.constants import EMPTY, Digit

# 1 2 | 3 4
# 3 4 | 1 2
# ----+----
# 2 1 | 4 3
# 4 3 | 2 1
SOLUTION_VALUES = [0, 1, 2, 3, 2, 3, 0, 1, 1, 0, 3, 2, 3, 2, 1, 0]
SOLUTION = [Digit(v) for v in SOLUTION_VALUES]

OPEN_CELLS = (0, 1, 5, 10, 14, 15)
PUZZLE = [EMPTY if pos in OPEN_CELLS else cell for pos, cell in enumerate(SOLUTION)]


def full_answer():
    """Answers for every open cell of PUZZLE."""
    return [SOLUTION[pos] if pos in OPEN_CELLS else EMPTY for pos in range(16)]
