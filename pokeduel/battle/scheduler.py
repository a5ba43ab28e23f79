"""Single-threaded timer queue driving every delay in a battle.

Callbacks never run concurrently: the owner pumps the queue with
:meth:`Scheduler.advance` / :meth:`Scheduler.run_until_idle`. The base class
keeps a virtual clock (tests); :class:`RealtimeScheduler` sleeps on the wall
clock instead (CLI).
"""
from __future__ import annotations
import heapq
import itertools
import time
from typing import Any, Callable, List, Optional, Tuple


class TimerHandle:
    __slots__ = ("due", "seq", "callback", "args", "cancelled", "fired")

    def __init__(self, due: float, seq: int, callback: Callable[..., Any], args: Tuple[Any, ...]):
        self.due = due
        self.seq = seq
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def __lt__(self, other: "TimerHandle") -> bool:
        return (self.due, self.seq) < (other.due, other.seq)

    def __repr__(self) -> str:
        name = getattr(self.callback, "__name__", repr(self.callback))
        state = "cancelled" if self.cancelled else ("fired" if self.fired else "pending")
        return f"<TimerHandle {name} due={self.due:.3f} {state}>"


class Scheduler:
    """Timer queue on a virtual clock that only moves when advanced."""

    def __init__(self):
        self._now = 0.0
        self._queue: List[TimerHandle] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        handle = TimerHandle(self.now() + delay, next(self._seq), callback, args)
        heapq.heappush(self._queue, handle)
        return handle

    def pending(self) -> int:
        return sum(1 for h in self._queue if h.active)

    def next_due(self) -> Optional[float]:
        while self._queue and not self._queue[0].active:
            heapq.heappop(self._queue)
        return self._queue[0].due if self._queue else None

    def _wait_until(self, when: float) -> None:
        self._now = max(self._now, when)

    def _run_next(self) -> None:
        handle = heapq.heappop(self._queue)
        self._wait_until(handle.due)
        handle.fired = True
        handle.callback(*handle.args)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing everything due on the way. Returns callbacks run."""
        target = self.now() + seconds
        ran = 0
        while True:
            due = self.next_due()
            if due is None or due > target:
                break
            self._run_next()
            ran += 1
        self._wait_until(target)
        return ran

    def run_until_idle(self, max_callbacks: int = 10_000) -> int:
        """Drain the queue, including callbacks scheduled while draining."""
        ran = 0
        while self.next_due() is not None:
            if ran >= max_callbacks:
                raise RuntimeError(f"scheduler still busy after {max_callbacks} callbacks")
            self._run_next()
            ran += 1
        return ran

    def cancel_all(self) -> None:
        for h in self._queue:
            h.cancel()
        self._queue.clear()


class RealtimeScheduler(Scheduler):
    """Same queue, but sleeps until each callback is due."""

    def __init__(self, sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.monotonic):
        super().__init__()
        self._sleep = sleep
        self._clock = clock
        self._origin = clock()

    def now(self) -> float:
        return self._clock() - self._origin

    def _wait_until(self, when: float) -> None:
        remaining = when - self.now()
        if remaining > 0:
            self._sleep(remaining)


__all__ = ["TimerHandle", "Scheduler", "RealtimeScheduler"]
