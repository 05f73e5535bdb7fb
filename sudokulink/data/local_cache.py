"""Local snapshot cache keyed by puzzle identity.

Each puzzle seed gets one JSON entry holding the full decoded state (not
the compact identifier form), plus one entry remembering the last seed
played. Storage is optional: availability is probed once and every failure
degrades to "nothing cached".
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from ..core.exceptions import CacheBackendError
from ..core.models import PuzzleState
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_CACHE_DIR = Path("local_db/collections/sudoku_state")
DEFAULT_NAMESPACE = "sudoku"

_PROBE_KEY = "__probe__"
_NON_WORD = re.compile(r"\W+")


class KeyValueBackend(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryBackend:
    """Dictionary backed store, scoped to the process."""

    def __init__(self) -> None:
        self.data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileBackend:
    """One ``<key>.json`` file per entry under ``directory``."""

    def __init__(self, directory: Union[Path, str] = DEFAULT_CACHE_DIR) -> None:
        self.directory = Path(directory)

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise CacheBackendError(f"Cannot read {path.name}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(value, encoding="utf-8")
        except OSError as exc:
            raise CacheBackendError(f"Cannot write {path.name}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as exc:
            raise CacheBackendError(f"Cannot delete {key}: {exc}") from exc

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"


class LocalCache:
    """Persist and restore :class:`PuzzleState` snapshots.

    Keys
    ----
    ``{namespace}{path}-{seed}`` where ``path`` is the page path with every
    run of non-word characters collapsed to ``-``. The last played seed lives
    under the same scheme with the literal seed ``"seed"``.
    """

    def __init__(
        self,
        backend: Optional[KeyValueBackend] = None,
        path: str = "/",
        namespace: str = DEFAULT_NAMESPACE,
        enabled: bool = True,
    ) -> None:
        self.backend = backend if backend is not None else MemoryBackend()
        self.path = path
        self.namespace = namespace
        self._available = enabled and self._probe()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def available(self) -> bool:
        return self._available

    def slot_key(self, seed: Union[int, str]) -> str:
        path_slug = _NON_WORD.sub("-", self.path)
        return f"{self.namespace}{path_slug}-{seed}"

    def load(self, key: str) -> Optional[PuzzleState]:
        data = self._read_json(key)
        if data is None:
            return None
        try:
            return PuzzleState.from_jsonable(data)
        except (TypeError, ValueError) as exc:
            LOGGER.warning("Ignoring unreadable cache entry %s: %s", key, exc)
            return None

    def save(self, key: str, state: PuzzleState) -> None:
        self._write_json(key, state.to_jsonable())

    def load_seed(self) -> int:
        value = self._read_json(self.slot_key("seed"))
        if isinstance(value, int) and not isinstance(value, bool) and value:
            return value
        return 1

    def save_seed(self, seed: int) -> None:
        self._write_json(self.slot_key("seed"), seed)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _probe(self) -> bool:
        try:
            self.backend.set(_PROBE_KEY, "1")
            self.backend.delete(_PROBE_KEY)
        except CacheBackendError as exc:
            LOGGER.warning("Local cache unavailable, continuing without it: %s", exc)
            return False
        return True

    def _read_json(self, key: str):
        if not self._available:
            return None
        try:
            raw = self.backend.get(key)
        except CacheBackendError as exc:
            LOGGER.warning("Cache read failed (%s): %s", key, exc)
            return None
        if raw is None:
            LOGGER.debug("Cache miss: %s", key)
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            LOGGER.warning("Cache entry %s is not JSON: %s", key, exc)
            return None

    def _write_json(self, key: str, value) -> None:
        if not self._available:
            return
        try:
            self.backend.set(key, json.dumps(value))
        except CacheBackendError as exc:
            LOGGER.warning("Cache write failed (%s): %s", key, exc)
