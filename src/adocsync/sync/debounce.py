#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/sync/debounce.py
"""Trailing-edge debouncer for text-side edits."""

from __future__ import annotations

import logging
from typing import Callable, Generic, Optional, TypeVar

from adocsync.sync.scheduler import ScheduledTask, Scheduler

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Deliver only the latest of a burst of values, ``delay_ms`` after the last one.

    Each ``push`` replaces the pending value and restarts the timer. ``flush``
    delivers the pending value immediately; ``cancel`` discards it.

    Parameters
    ----------
    scheduler : Scheduler
        Source of delayed execution
    delay_ms : int
        Quiet period before the pending value is delivered
    callback : callable
        Receives the pending value

    """

    def __init__(self, scheduler: Scheduler, delay_ms: int, callback: Callable[[T], None]):
        self._scheduler = scheduler
        self._delay_ms = delay_ms
        self._callback = callback
        self._task: Optional[ScheduledTask] = None
        self._value: Optional[T] = None
        self._dirty = False

    @property
    def pending(self) -> bool:
        """Whether a value is waiting to be delivered."""
        return self._dirty

    def push(self, value: T) -> None:
        """Replace the pending value and restart the quiet period."""
        self._value = value
        self._dirty = True
        self._cancel_timer()
        if self._delay_ms <= 0:
            self.flush()
            return
        self._task = self._scheduler.call_later(self._delay_ms, self._fire)

    def flush(self) -> bool:
        """Deliver the pending value now.

        Returns
        -------
        bool
            True if a value was delivered

        """
        self._cancel_timer()
        if not self._dirty:
            return False
        value = self._value
        self._dirty = False
        self._value = None
        self._callback(value)  # type: ignore[arg-type]
        return True

    def cancel(self) -> None:
        """Discard the pending value without delivering it."""
        self._cancel_timer()
        self._dirty = False
        self._value = None

    def _cancel_timer(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def _fire(self) -> None:
        self._task = None
        logger.debug("Debounce period elapsed, delivering pending value")
        self.flush()
