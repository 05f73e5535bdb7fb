"""Custom exception hierarchy for the puzzle state layer.

None of these escape :class:`StateSynchronizer`; they are raised by
backends and collaborators and caught where a fallback is defined.
"""


class SudokuLinkError(Exception):
    """Base exception for state persistence failures."""


class CacheBackendError(SudokuLinkError):
    """Raised when the local key-value store cannot be read or written."""


class GenerationError(SudokuLinkError):
    """Raised when the puzzle generator cannot produce a board."""


class EventLogError(SudokuLinkError):
    """Raised when an event sink fails to deliver an event."""
