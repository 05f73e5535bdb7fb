"""The shareable identifier as a flat ``key=value&key=value`` store.

The identifier plays the role of a URL fragment: it is the system of
record for the current puzzle and can be bookmarked, shared or edited by
hand. :class:`MemoryLocation` stands in for the browser location so the
same navigation rules (history entries, in-place replacement, change
listeners) apply in-process.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, List, Mapping, Optional
from urllib.parse import unquote_plus

from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Listener = Callable[[str], None]

_LEADING_NON_WORD = re.compile(r"^\W*")


class MemoryLocation:
    """In-process navigable location holding the current identifier."""

    supports_replace = True

    def __init__(self, initial: str = "") -> None:
        self.hash = initial.lstrip("#")
        self.history: List[str] = []
        self._listeners: List[Listener] = []

    def assign(self, value: str) -> None:
        """Navigate to ``value``, creating a history entry."""
        if value == self.hash:
            return
        self.history.append(self.hash)
        self.hash = value
        self._notify()

    def replace(self, value: str) -> None:
        """Overwrite the current entry without history or listeners."""
        self.hash = value

    def back(self) -> bool:
        if not self.history:
            return False
        self.hash = self.history.pop()
        self._notify()
        return True

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.hash)


class HashStore:
    """Read and write the identifier as a flat string mapping."""

    def __init__(self, location: Optional[MemoryLocation] = None) -> None:
        self.location = location if location is not None else MemoryLocation()
        self._writing = False
        self._subscribers: List[Callable[[], None]] = []
        self.location.add_listener(self._on_location_change)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def read(self) -> Dict[str, str]:
        result: Dict[str, str] = {}
        raw = _LEADING_NON_WORD.sub("", self.location.hash)
        for segment in raw.split("&"):
            if not segment:
                continue
            key, sep, value = segment.partition("=")
            if not key or not sep:
                LOGGER.debug("Skipping malformed identifier segment %r", segment)
                continue
            result[key] = unquote_plus(value)
        return result

    def write(self, data: Mapping[str, object]) -> None:
        """Install ``data`` as the identifier.

        Values are written verbatim. The first write onto an empty location
        replaces it in place; later writes create history entries.
        """
        encoded = "&".join(f"{key}={value}" for key, value in data.items())
        self._writing = True
        try:
            if not self.location.hash and self.location.supports_replace:
                self.location.replace(encoded)
            else:
                self.location.assign(encoded)
        finally:
            self._writing = False

    def is_empty(self) -> bool:
        return not self.location.hash

    def url(self) -> str:
        return "#" + self.location.hash

    def subscribe(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` whenever the identifier changes from outside."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[], None]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _on_location_change(self, _value: str) -> None:
        if self._writing:
            return
        for callback in list(self._subscribers):
            callback()
