from __future__ import annotations

import itertools
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class TaskHandle:
    """Handle for a scheduled callback. cancel() may be called any number of times."""

    def __init__(self, callback: Callback, seq: int, period_ms: Optional[float] = None, due_ms: float = 0.0) -> None:
        self.callback = callback
        self.seq = seq
        self.period_ms = period_ms
        self.due_ms = due_ms
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    @property
    def repeating(self) -> bool:
        return self.period_ms is not None

    def cancel(self) -> None:
        self._active = False

    def _finish(self) -> None:
        self._active = False


def cancel_all(*handles: Optional[TaskHandle]) -> None:
    """Cancels every handle given; None entries are skipped."""
    for h in handles:
        if h is not None:
            h.cancel()


class FrameClock:
    """
    Virtual clock driving interval timers and animation-frame requests.

    Time only moves when advance() is called, so the same sequence of
    advance() calls always produces the same sequence of callbacks. The
    browser host calls advance() once per real animation frame with the
    elapsed milliseconds; tests call it directly.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)
        self._seq = itertools.count()
        self._intervals: List[TaskHandle] = []
        self._frames: List[TaskHandle] = []

    @property
    def now_ms(self) -> float:
        return self._now

    @property
    def pending_frames(self) -> int:
        return sum(1 for h in self._frames if h.active)

    @property
    def active_intervals(self) -> int:
        return sum(1 for h in self._intervals if h.active)

    def set_interval(self, period_ms: float, callback: Callback) -> TaskHandle:
        if period_ms <= 0:
            raise ValueError(f'period must be positive, got {period_ms}')
        handle = TaskHandle(callback, next(self._seq), period_ms=float(period_ms), due_ms=self._now + period_ms)
        self._intervals.append(handle)
        return handle

    def request_frame(self, callback: Callback) -> TaskHandle:
        handle = TaskHandle(callback, next(self._seq))
        self._frames.append(handle)
        return handle

    def advance(self, dt_ms: float) -> int:
        """
        Moves the clock forward by dt_ms.

        Interval timers due within the window fire first, in due-time order
        (a long window can fire the same timer several times). Then every
        frame callback requested before this call runs once. Frames requested
        from inside a frame callback wait for the next advance(). Returns the
        number of frame callbacks run.
        """
        if dt_ms < 0:
            raise ValueError(f'dt must not be negative, got {dt_ms}')
        target = self._now + dt_ms
        while True:
            due = [h for h in self._intervals if h.active and h.due_ms <= target]
            if not due:
                break
            handle = min(due, key=lambda h: (h.due_ms, h.seq))
            self._now = handle.due_ms
            handle.due_ms += handle.period_ms  # type: ignore[operator]
            handle.callback()
        self._now = target
        self._intervals = [h for h in self._intervals if h.active]

        batch, self._frames = self._frames, []
        ran = 0
        for handle in batch:
            if not handle.active:
                continue
            handle._finish()
            handle.callback()
            ran += 1
        if ran > 1:
            logger.debug('Ran %d frame callbacks in one advance', ran)
        return ran
