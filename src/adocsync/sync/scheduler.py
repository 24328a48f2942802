#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/sync/scheduler.py
"""Deferred execution for debouncing and highlight expiry.

The sync controller never sleeps or starts threads. Every delayed action goes
through an injected ``Scheduler``:

- ``AsyncioScheduler`` runs callbacks on an asyncio event loop
- ``VirtualScheduler`` runs them when the caller advances a virtual clock,
  which makes timing behavior deterministic in tests

"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class ScheduledTask(Protocol):
    """Handle for a scheduled callback."""

    def cancel(self) -> None:
        """Prevent the callback from running if it has not run yet."""
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Anything that can run a callback after a delay in milliseconds."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        """Schedule ``callback`` to run after ``delay_ms`` milliseconds."""
        ...


class _AsyncioTask:
    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop's ``call_later``.

    Parameters
    ----------
    loop : asyncio.AbstractEventLoop, optional
        Loop to schedule on. Defaults to the running loop at call time.

    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        """Schedule ``callback`` on the event loop after ``delay_ms`` milliseconds."""
        loop = self._loop or asyncio.get_running_loop()
        return _AsyncioTask(loop.call_later(max(delay_ms, 0) / 1000.0, callback))


@dataclass(order=True)
class _VirtualTask:
    due_ms: int
    sequence: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class VirtualScheduler:
    """Scheduler driven by an explicit virtual clock.

    Callbacks run only from ``advance``, in due-time order; callbacks due at
    the same time run in the order they were scheduled. A callback may
    schedule further callbacks, which also run if they fall due within the
    same ``advance``.

    Examples
    --------
        >>> scheduler = VirtualScheduler()
        >>> fired = []
        >>> _ = scheduler.call_later(500, lambda: fired.append("a"))
        >>> scheduler.advance(499)
        >>> fired
        []
        >>> scheduler.advance(1)
        >>> fired
        ['a']

    """

    def __init__(self) -> None:
        self.now_ms = 0
        self._queue: list[_VirtualTask] = []
        self._counter = itertools.count()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        """Schedule ``callback`` to run ``delay_ms`` after the current virtual time."""
        task = _VirtualTask(self.now_ms + max(delay_ms, 0), next(self._counter), callback)
        heapq.heappush(self._queue, task)
        return task

    @property
    def pending(self) -> int:
        """Number of scheduled callbacks that have neither run nor been cancelled."""
        return sum(1 for task in self._queue if not task.cancelled)

    def advance(self, ms: int) -> None:
        """Move the clock forward by ``ms`` and run every callback that falls due."""
        if ms < 0:
            raise ValueError(f"Cannot move the clock backwards (ms={ms})")

        target = self.now_ms + ms
        while self._queue and self._queue[0].due_ms <= target:
            task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            self.now_ms = task.due_ms
            task.callback()
        self.now_ms = target
