"""Elapsed active time for the current viewing session."""

from __future__ import annotations

import sched
from typing import Callable, Optional

from ..core.clock import Clock, SystemClock
from ..core.constants import TICK_MS
from ..core.models import PuzzleState
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class TimeKeeper:
    """Measures elapsed time against ``session_start`` and drives the timer.

    Elapsed time is ``now - session_start`` while the puzzle is unsolved and
    the stored ``state.elapsed`` once it is solved. The display tick is a
    self-rescheduling task on ``scheduler`` that aligns to whole seconds of
    elapsed time and stops on its own when the puzzle is solved or the timer
    is hidden.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        scheduler: Optional[sched.scheduler] = None,
        is_solved: Optional[Callable[[PuzzleState], bool]] = None,
        on_tick: Optional[Callable[[int], None]] = None,
    ) -> None:
        self.clock = clock or SystemClock()
        self.scheduler = scheduler or sched.scheduler(self.clock.now, self.clock.sleep)
        self.is_solved = is_solved or (lambda state: False)
        self.on_tick = on_tick
        self.session_start = self.clock.now()
        self.running = False
        self.visible = True
        self._pending: Optional[sched.Event] = None

    def on_state_loaded(self, state: PuzzleState) -> None:
        if state.gentime > self.session_start:
            self.session_start = state.gentime

    def resume(self, elapsed: int) -> None:
        """Continue a clock that already shows ``elapsed`` milliseconds."""
        self.session_start = self.clock.now() - elapsed

    def compute_elapsed(self, state: PuzzleState, now: Optional[int] = None) -> int:
        if self.is_solved(state):
            return state.elapsed
        now = self.clock.now() if now is None else now
        return now - self.session_start

    def sync(self, state: PuzzleState, solved: Optional[bool] = None) -> None:
        """Bring the ticking task in line with the state just rendered."""
        if solved is None:
            solved = self.is_solved(state)
        # The intro puzzle keeps its clock out of sight until it is solved.
        self.visible = solved or state.seed != 1
        if solved:
            self.stop()
            return
        if not self.running:
            self.running = True
            self.tick()

    def tick(self) -> None:
        self._pending = None
        if not (self.running and self.visible):
            self.running = False
            return
        elapsed = self.clock.now() - self.session_start
        if self.on_tick is not None:
            self.on_tick(elapsed)
        self._pending = self.scheduler.enter(TICK_MS - elapsed % TICK_MS, 0, self.tick)

    def stop(self) -> None:
        self.running = False
        if self._pending is not None:
            try:
                self.scheduler.cancel(self._pending)
            except ValueError:
                LOGGER.debug("Timer tick already dispatched")
            self._pending = None
