"""Per-document debounce scheduler.

Owns every pending re-scan timer. ``schedule`` (cancel-and-restart),
``cancel`` and ``cancel_all`` are its only mutating operations; no other
component creates or cancels these timers.

Timers come from an injectable factory. The default schedules on the running
asyncio loop with ``call_later``; tests pass a manual factory and fire timers
explicitly.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

__all__ = [
    "DebounceScheduler",
    "TimerFactory",
    "TimerHandle",
    "loop_timer_factory",
]


class TimerHandle(Protocol):
    """Cancellable pending callback (``asyncio.TimerHandle`` satisfies this)."""

    def cancel(self) -> None:
        """Prevent the callback from running."""
        ...


type TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]
"""Schedules callback after delay seconds and returns a cancellable handle."""


def loop_timer_factory(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Schedule on the running asyncio loop.

    Raises:
        RuntimeError: If called outside a running event loop
    """
    return asyncio.get_running_loop().call_later(delay, callback)


class DebounceScheduler:
    """Trailing-edge debounce keyed by document identity.

    Scheduling for a document that already has a pending timer cancels it
    and starts a fresh one, so only the last event of a burst fires.

    Example:
        >>> scheduler = DebounceScheduler()
        >>> scheduler.schedule("doc-1", 0.3, lambda: print("rescan"))
        >>> scheduler.schedule("doc-1", 0.3, lambda: print("rescan"))  # restarts
        >>> scheduler.pending_count
        1
    """

    __slots__ = ("_timer_factory", "_timers")

    def __init__(self, timer_factory: TimerFactory | None = None) -> None:
        """Initialize scheduler.

        Args:
            timer_factory: Timer source (defaults to the running asyncio loop)
        """
        self._timer_factory: TimerFactory = (
            timer_factory if timer_factory is not None else loop_timer_factory
        )
        self._timers: dict[str, TimerHandle] = {}

    def schedule(self, doc_id: str, delay: float, callback: Callable[[], None]) -> None:
        """Start (or restart) the timer for a document.

        Args:
            doc_id: Document identity
            delay: Seconds until the callback runs
            callback: Called once, unless cancelled or rescheduled first
        """
        self.cancel(doc_id)

        def fire() -> None:
            # A timer already replaced must not fire
            if self._timers.get(doc_id) is not handle:
                return
            del self._timers[doc_id]
            callback()

        handle = self._timer_factory(delay, fire)
        self._timers[doc_id] = handle
        logger.debug("Debounce timer set for %s (%.3fs)", doc_id, delay)

    def cancel(self, doc_id: str) -> bool:
        """Cancel the pending timer for a document.

        Returns:
            True if a timer was pending
        """
        handle = self._timers.pop(doc_id, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def cancel_all(self) -> int:
        """Cancel every pending timer.

        Returns:
            Number of timers cancelled
        """
        handles = list(self._timers.values())
        self._timers.clear()
        for handle in handles:
            handle.cancel()
        if handles:
            logger.debug("Cancelled %d pending debounce timers", len(handles))
        return len(handles)

    def is_pending(self, doc_id: str) -> bool:
        """Check if a timer is pending for a document."""
        return doc_id in self._timers

    @property
    def pending_count(self) -> int:
        """Number of documents with a pending timer."""
        return len(self._timers)
