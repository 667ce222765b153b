"""
Destino - Tick Scheduling

Timer sources that drive the round counter. ``VirtualClock`` is advanced
by hand (tests, or a UI loop that sleeps between callbacks); ``ThreadingClock``
fires callbacks from background timer threads.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import threading
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """Anything returned by ``call_later`` that can be cancelled."""

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Schedules a callback to run once after a delay in milliseconds."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle: ...


class _ScheduledCall:
    """A pending callback on a VirtualClock."""

    __slots__ = ("due_ms", "seq", "callback", "cancelled")

    def __init__(self, due_ms: int, seq: int, callback: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __lt__(self, other: "_ScheduledCall") -> bool:
        return (self.due_ms, self.seq) < (other.due_ms, other.seq)


class VirtualClock:
    """Manually advanced clock.

    Callbacks run on the thread calling ``advance`` or ``run_until_idle``,
    in due-time order. Callbacks scheduled while advancing are picked up
    in the same call if they fall due before the target time.
    """

    def __init__(self) -> None:
        self._now_ms = 0
        self._queue: list[_ScheduledCall] = []
        self._seq = itertools.count()

    @property
    def now_ms(self) -> int:
        return self._now_ms

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> _ScheduledCall:
        if delay_ms < 0:
            raise ValueError(f"Delay cannot be negative, got {delay_ms}.")
        entry = _ScheduledCall(self._now_ms + delay_ms, next(self._seq), callback)
        heapq.heappush(self._queue, entry)
        return entry

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0].cancelled:
            heapq.heappop(self._queue)

    @property
    def pending_count(self) -> int:
        """Number of callbacks still waiting to fire."""
        return sum(1 for entry in self._queue if not entry.cancelled)

    def time_until_next(self) -> int | None:
        """Milliseconds until the next callback, or None if nothing is pending."""
        self._drop_cancelled()
        if not self._queue:
            return None
        return max(0, self._queue[0].due_ms - self._now_ms)

    def advance(self, ms: int) -> int:
        """Move time forward, firing every callback that falls due.

        Returns:
            Number of callbacks fired
        """
        if ms < 0:
            raise ValueError(f"Cannot move time backwards ({ms} ms).")

        target = self._now_ms + ms
        fired = 0

        while True:
            self._drop_cancelled()
            if not self._queue or self._queue[0].due_ms > target:
                break
            entry = heapq.heappop(self._queue)
            self._now_ms = entry.due_ms
            entry.callback()
            fired += 1

        self._now_ms = target
        return fired

    def run_until_idle(
        self,
        sleep: Callable[[float], None] | None = None,
        max_callbacks: int = 100_000,
    ) -> int:
        """Fire callbacks until none are pending.

        Args:
            sleep: Optional real-time sleep (seconds) called before each
                wait, e.g. ``time.sleep`` to pace an on-screen animation.
            max_callbacks: Safety limit on the number of callbacks fired.

        Returns:
            Number of callbacks fired
        """
        fired = 0
        while fired < max_callbacks:
            delay = self.time_until_next()
            if delay is None:
                break
            if sleep is not None and delay > 0:
                sleep(delay / 1000)
            fired += self.advance(delay)
        return fired


class ThreadingClock:
    """Real-time clock backed by ``threading.Timer``.

    Callbacks run on timer threads; callers must handle thread safety.
    """

    def __init__(self) -> None:
        self._timers: set[threading.Timer] = set()
        self._lock = threading.Lock()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> threading.Timer:
        if delay_ms < 0:
            raise ValueError(f"Delay cannot be negative, got {delay_ms}.")

        timer = threading.Timer(delay_ms / 1000, self._fire, args=(callback,))
        timer.daemon = True
        timer.name = f"destino-tick-{id(timer):x}"
        with self._lock:
            self._timers.add(timer)
        timer.start()
        return timer

    def _fire(self, callback: Callable[[], None]) -> None:
        with self._lock:
            self._timers.discard(threading.current_thread())
        try:
            callback()
        except Exception:
            logger.exception("Scheduled callback failed")

    @property
    def pending_count(self) -> int:
        # Cancelled timers never reach _fire, so prune them here
        with self._lock:
            self._timers = {t for t in self._timers if not t.finished.is_set()}
            return len(self._timers)

    def shutdown(self) -> None:
        """Cancel every pending timer."""
        with self._lock:
            timers = list(self._timers)
            self._timers.clear()
        for timer in timers:
            timer.cancel()
