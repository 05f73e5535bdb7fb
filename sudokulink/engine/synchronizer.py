"""Keeps the identifier, the local cache and the clock in step.

``commit`` is the unit of consistency: it settles elapsed time, writes the
encoded state to the identifier and mirrors the same snapshot into the
local cache, then asks the renderer to redraw. Loads and navigation go the
other way: decode the identifier, fall back to the cache or the generator,
and render without writing.
"""

from __future__ import annotations

import sched
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Union

from ..core.clock import Clock, SystemClock
from ..core.constants import DEFAULT_BOX_SIZE, EMPTY, MAX_SEED, MIN_SEED, Digit, Grid
from ..core.exceptions import GenerationError
from ..core.models import CheckOutcome, PuzzleState
from ..data.local_cache import JsonFileBackend, LocalCache, MemoryBackend
from ..io.event_log import EventLog
from ..utils.logger import get_logger
from .codec import ScalarCodec
from .hash_store import HashStore
from .solver import SudokuGenerator
from .timekeeper import TimeKeeper
from .validator import count_filled, find_conflicts, merged_grid
from .validator import is_solved as board_is_solved


LOGGER = get_logger(__name__)


@dataclass
class SessionConfig:
    """Settings for one page session."""

    box_size: int = DEFAULT_BOX_SIZE
    page_path: str = "/"
    use_local_storage: bool = True
    symmetric_puzzles: bool = False
    quick: bool = False
    cache_dir: Optional[Union[Path, str]] = None
    event_endpoint: Optional[str] = None

    def build_cache(self) -> LocalCache:
        backend = JsonFileBackend(self.cache_dir) if self.cache_dir else MemoryBackend()
        return LocalCache(backend, path=self.page_path, enabled=self.use_local_storage)


class Renderer(Protocol):
    def on_state_changed(self, state: PuzzleState, pos: Optional[int]) -> None:
        ...

    def on_timer(self, elapsed: int, visible: bool, finished: bool) -> None:
        ...


class NullRenderer:
    def on_state_changed(self, state: PuzzleState, pos: Optional[int]) -> None:
        pass

    def on_timer(self, elapsed: int, visible: bool, finished: bool) -> None:
        pass


class StateSynchronizer:
    """Orchestrates decode, reconcile, commit and render for one session."""

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        hash_store: Optional[HashStore] = None,
        cache: Optional[LocalCache] = None,
        generator: Optional[SudokuGenerator] = None,
        renderer: Optional[Renderer] = None,
        events: Optional[EventLog] = None,
        clock: Optional[Clock] = None,
        scheduler: Optional[sched.scheduler] = None,
    ) -> None:
        self.config = config or SessionConfig()
        self.codec = ScalarCodec(self.config.box_size)
        self.dims = self.codec.dims
        self.hash_store = hash_store or HashStore()
        self.cache = cache or self.config.build_cache()
        self.generator = generator or SudokuGenerator(self.config.box_size)
        self.renderer = renderer or NullRenderer()
        self.events = events or EventLog.from_env(self.config.event_endpoint)
        self.clock = clock or SystemClock()
        self.scheduler = scheduler or sched.scheduler(self.clock.now, self.clock.sleep)
        self.timekeeper = TimeKeeper(
            clock=self.clock,
            scheduler=self.scheduler,
            is_solved=self.is_solved,
            on_tick=self._on_tick,
        )
        self._committed_solved = False
        self._subscribed = False

    # ------------------------------------------------------------------
    # Reading state
    # ------------------------------------------------------------------

    def current_state(self) -> PuzzleState:
        return self.codec.decode_state(self.hash_store.read())

    def is_solved(self, state: PuzzleState) -> bool:
        return board_is_solved(state, self.dims.box)

    def check(self, state: Optional[PuzzleState] = None) -> CheckOutcome:
        """Report whether the board so far has mistakes or is complete."""
        state = state or self.current_state()
        board = merged_grid(state, self.dims.box)
        if find_conflicts(board, self.dims.box):
            return CheckOutcome.ERRORS
        if count_filled(board) == self.dims.cells:
            return CheckOutcome.VICTORY
        return CheckOutcome.OK

    def identifier(self) -> str:
        return self.hash_store.url()

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def load(self) -> PuzzleState:
        """Start the session from the identifier, or set up a game if it has none."""
        if not self._subscribed:
            self.hash_store.subscribe(self.refresh)
            self._subscribed = True

        if not self.hash_store.is_empty():
            state = self.current_state()
            if state.seed:
                self.timekeeper.resume(state.elapsed)
                self.events.emit("linkgame", {"seed": state.seed})
                self.cache.save_seed(state.seed)
                self._committed_solved = self.is_solved(state)
                self._render(state)
                return state
        return self.setup(0)

    def refresh(self) -> PuzzleState:
        """Redraw after the identifier was changed from outside; never writes."""
        state = self.current_state()
        self._committed_solved = self.is_solved(state)
        self._render(state)
        return state

    def close(self) -> None:
        self.timekeeper.stop()
        if self._subscribed:
            self.hash_store.unsubscribe(self.refresh)
            self._subscribed = False

    def run_pending(self) -> None:
        """Run deferred commits and timer ticks that are due."""
        self.scheduler.run(blocking=False)

    # ------------------------------------------------------------------
    # Writing state
    # ------------------------------------------------------------------

    def commit(self, state: PuzzleState, pos: Optional[int] = None) -> PuzzleState:
        now = self.clock.now()
        self.timekeeper.on_state_loaded(state)
        solved = self.is_solved(state)
        # Elapsed freezes at the first commit that sees the puzzle solved.
        if not (solved and self._committed_solved):
            state.elapsed = now - self.timekeeper.session_start
        self._committed_solved = solved

        self.hash_store.write(self.codec.encode_state(state))
        self.cache.save(self.cache.slot_key(state.seed), state)
        self._render(state, pos)
        return state

    def setup(self, seed: int) -> PuzzleState:
        """Make puzzle ``seed`` current, from the cache if possible."""
        if not seed:
            seed = self.cache.load_seed()
        self.events.emit("setupgame", {"seed": seed})
        self.cache.save_seed(seed)

        cached = self.cache.load(self.cache.slot_key(seed))
        if cached is not None and self._usable_snapshot(cached):
            LOGGER.info("Resuming cached puzzle #%s", seed)
            self.timekeeper.resume(cached.elapsed)
            return self.commit(cached)

        state = PuzzleState(
            puzzle=self._generate(seed),
            answer=[],
            work=[],
            seed=seed,
            gentime=self.clock.now(),
            elapsed=0,
        )
        return self.commit(state)

    def clear(self, state: Optional[PuzzleState] = None) -> PuzzleState:
        self.run_pending()
        state = state or self.current_state()
        cleared = PuzzleState(
            puzzle=list(state.puzzle),
            answer=[],
            work=[],
            seed=state.seed,
            gentime=self.clock.now(),
        )
        return self.commit(cleared)

    def advance(self, delta: int) -> PuzzleState:
        """Move to the puzzle ``delta`` seeds away, stashing the current one."""
        self.run_pending()
        state = self.current_state()
        seed = state.seed
        if MIN_SEED <= seed <= MAX_SEED:
            self.cache.save(self.cache.slot_key(seed), state)
        seed += delta
        if not MIN_SEED <= seed <= MAX_SEED:
            seed = MIN_SEED
        return self.setup(seed)

    def enter(self, pos: int, digit: Optional[int], pencil: bool = False) -> Optional[PuzzleState]:
        """Apply one cell edit and schedule its commit.

        ``digit`` is zero-based; ``None`` erases the cell. With ``pencil`` the
        digit toggles a candidate mark instead of being written. Edits to
        given cells and out-of-range input are ignored.
        """
        if not self.dims.contains(pos):
            return None
        if digit is not None and not 0 <= digit < self.dims.side:
            return None
        # Commits deferred by earlier edits land before this edit reads the identifier.
        self.run_pending()
        state = self.current_state()
        if state.is_given(pos):
            return None

        if digit is None:
            state.answer[pos] = EMPTY
            state.work[pos] = 0
        elif pencil:
            state.answer[pos] = EMPTY
            state.work[pos] ^= 1 << digit
        else:
            state.answer[pos] = Digit(digit)
            state.work[pos] = 0
            if self.is_solved(state):
                # Stamp elapsed now so the cell redraw already shows the final time.
                self.timekeeper.on_state_loaded(state)
                state.elapsed = self.clock.now() - self.timekeeper.session_start
                self.events.emit("victory", {"elapsed": state.elapsed, "seed": state.seed})

        self._render(state, pos)
        self.scheduler.enter(0, 0, self.commit, argument=(state, pos))
        return state

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _usable_snapshot(self, state: PuzzleState) -> bool:
        """A cached state must hold a full puzzle with only on-board digits."""
        if len(state.puzzle) != self.dims.cells or all(cell is EMPTY for cell in state.puzzle):
            return False
        return all(
            cell is EMPTY or 0 <= cell.value < self.dims.side
            for cell in state.puzzle + state.answer
        )

    def _generate(self, seed: int) -> Grid:
        try:
            return self.generator.generate(seed, self.config.quick, self.config.symmetric_puzzles)
        except GenerationError as exc:
            LOGGER.error("Puzzle #%s could not be generated: %s", seed, exc)
            return [EMPTY] * self.dims.cells

    def _render(self, state: PuzzleState, pos: Optional[int] = None) -> None:
        solved = self.is_solved(state)
        self.renderer.on_state_changed(state, pos)
        if solved:
            self.renderer.on_timer(state.elapsed, True, True)
        else:
            self.renderer.on_timer(
                self.timekeeper.compute_elapsed(state), state.seed != 1, False
            )
        self.timekeeper.sync(state, solved)

    def _on_tick(self, elapsed: int) -> None:
        self.renderer.on_timer(elapsed, True, False)
