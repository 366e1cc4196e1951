"""
Cancellable deferred and periodic actions.

The engine never sleeps or blocks. Mismatch recovery and the countdown tick
are handed to a Scheduler owned by whatever runs the event loop: a manual
virtual clock for tests and simulations, an asyncio loop, or a Qt timer
(see desktop_ui).
"""
from __future__ import annotations

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

Callback = Callable[[], None]


class ScheduledAction(ABC):
    """Handle to a pending action."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop the action. Safe to call more than once."""

    @property
    @abstractmethod
    def active(self) -> bool:
        """True while the action may still fire."""


class Scheduler(ABC):
    """Source of one-shot and repeating timers."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callback) -> ScheduledAction:
        """Run ``callback`` once after ``delay_ms`` milliseconds."""

    @abstractmethod
    def call_every(self, interval_ms: int, callback: Callback) -> ScheduledAction:
        """Run ``callback`` every ``interval_ms`` milliseconds until cancelled."""


# ----------------------------------------------------------------------
class _ManualAction(ScheduledAction):
    def __init__(self, interval_ms: Optional[int], callback: Callback) -> None:
        self.interval_ms = interval_ms
        self.callback = callback
        self._active = True

    def cancel(self) -> None:
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def finish(self) -> None:
        self._active = False


class ManualScheduler(Scheduler):
    """
    Scheduler driven by an explicit virtual clock.

    Nothing fires until ``advance`` is called. Due actions run in due-time
    order; actions due at the same time run in the order they were scheduled.
    """

    def __init__(self) -> None:
        self._now_ms = 0
        self._seq = itertools.count()
        self._queue: List[Tuple[int, int, _ManualAction]] = []

    @property
    def now_ms(self) -> int:
        return self._now_ms

    @property
    def pending(self) -> int:
        """Number of queued actions that are still active."""
        return sum(1 for _, _, action in self._queue if action.active)

    def call_later(self, delay_ms: int, callback: Callback) -> ScheduledAction:
        action = _ManualAction(None, callback)
        self._push(self._now_ms + max(0, delay_ms), action)
        return action

    def call_every(self, interval_ms: int, callback: Callback) -> ScheduledAction:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        action = _ManualAction(interval_ms, callback)
        self._push(self._now_ms + interval_ms, action)
        return action

    def _push(self, due_ms: int, action: _ManualAction) -> None:
        heapq.heappush(self._queue, (due_ms, next(self._seq), action))

    def advance(self, ms: int) -> int:
        """
        Move the clock forward and run everything that falls due.

        Args:
            ms: Milliseconds to advance

        Returns:
            Number of callbacks that ran
        """
        if ms < 0:
            raise ValueError("cannot move the clock backwards")
        target = self._now_ms + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due_ms, _, action = heapq.heappop(self._queue)
            if not action.active:
                continue
            self._now_ms = due_ms
            if action.interval_ms is None:
                action.finish()
            else:
                self._push(due_ms + action.interval_ms, action)
            action.callback()
            fired += 1
        self._now_ms = target
        return fired


# ----------------------------------------------------------------------
class _AsyncioAction(ScheduledAction):
    def __init__(self) -> None:
        self.handle: Optional[asyncio.TimerHandle] = None
        self._active = True

    def cancel(self) -> None:
        self._active = False
        if self.handle is not None:
            self.handle.cancel()
            self.handle = None

    @property
    def active(self) -> bool:
        return self._active

    def finish(self) -> None:
        self._active = False
        self.handle = None


class AsyncioScheduler(Scheduler):
    """Scheduler backed by ``loop.call_later`` on an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop or asyncio.get_running_loop()

    def call_later(self, delay_ms: int, callback: Callback) -> ScheduledAction:
        action = _AsyncioAction()

        def fire() -> None:
            if not action.active:
                return
            action.finish()
            callback()

        action.handle = self._loop.call_later(max(0, delay_ms) / 1000.0, fire)
        return action

    def call_every(self, interval_ms: int, callback: Callback) -> ScheduledAction:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        action = _AsyncioAction()
        interval = interval_ms / 1000.0
        next_due = self._loop.time() + interval

        def fire() -> None:
            nonlocal next_due
            if not action.active:
                return
            # Reschedule before running so a callback that cancels sticks.
            next_due += interval
            action.handle = self._loop.call_at(next_due, fire)
            callback()

        action.handle = self._loop.call_at(next_due, fire)
        return action
