"""Cancellable timers for the shop view (search debounce, reveal delay).

Timers are scheduled on the running asyncio loop. A cancelled timer can
never fire, even if its loop callback was already queued.
"""
import asyncio
from typing import Any, Callable, Optional

from ..utils.logger import get_logger

logger = get_logger()


class CancellableTimer:
    """One-shot timer handle owned by the component that started it."""

    def __init__(self, delay: float, callback: Callable[..., Any], *args: Any,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        if delay < 0:
            raise ValueError("timer delay must not be negative")
        self._loop = loop or asyncio.get_running_loop()
        self._callback = callback
        self._args = args
        self._cancelled = False
        self._fired = False
        self._handle = self._loop.call_later(delay, self._fire)

    def _fire(self) -> None:
        if self._cancelled:
            return
        self._fired = True
        self._callback(*self._args)

    def cancel(self) -> bool:
        """Invalidate the timer. Returns False if it had already fired or been cancelled."""
        if self._fired or self._cancelled:
            return False
        self._cancelled = True
        self._handle.cancel()
        return True

    @property
    def active(self) -> bool:
        return not (self._fired or self._cancelled)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired


class Debouncer:
    """Commit a value only after ``delay`` seconds without a newer push.

    Each push cancels the previous timer, so the last keystroke wins and a
    stale commit can never land after a newer one.
    """

    def __init__(self, delay: float, on_commit: Callable[[str], Any]):
        self.delay = delay
        self.on_commit = on_commit
        self._timer: Optional[CancellableTimer] = None
        self._pending: Optional[str] = None

    def push(self, value: str) -> None:
        self.cancel()
        self._pending = value
        self._timer = CancellableTimer(self.delay, self._commit, value)

    def _commit(self, value: str) -> None:
        self._timer = None
        self._pending = None
        logger.debug(f"[SHOP] debounce committed {value!r}")
        self.on_commit(value)

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._pending = None

    @property
    def pending(self) -> bool:
        return self._timer is not None and self._timer.active

    @property
    def pending_value(self) -> Optional[str]:
        return self._pending if self.pending else None
