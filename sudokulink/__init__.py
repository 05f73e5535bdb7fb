"""URL-fragment state persistence for a small sudoku game.

This package exposes the public API surface via:

- ``sudokulink.engine.synchronizer.StateSynchronizer``: commit, setup, clear and navigation.
- ``sudokulink.engine.codec.ScalarCodec``: compact identifier encoding.
- ``sudokulink.engine.hash_store.HashStore``: the shareable ``key=value`` identifier.
- ``sudokulink.data.local_cache.LocalCache``: per-seed snapshot cache.
"""

from .core.models import CheckOutcome, PuzzleState
from .data.local_cache import LocalCache
from .engine.codec import ScalarCodec
from .engine.hash_store import HashStore, MemoryLocation
from .engine.synchronizer import SessionConfig, StateSynchronizer
from .engine.timekeeper import TimeKeeper

__all__ = [
    "CheckOutcome",
    "HashStore",
    "LocalCache",
    "MemoryLocation",
    "PuzzleState",
    "ScalarCodec",
    "SessionConfig",
    "StateSynchronizer",
    "TimeKeeper",
]

__version__ = "0.1.0"
