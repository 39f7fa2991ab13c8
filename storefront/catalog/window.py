"""Reveal window behind the infinite-scroll product grid.

States:
    Idle(size)    -- trigger with size < total  --> Loading(size)
    Loading(size) -- delay elapses              --> Idle(advance_window(size))
    any           -- reset()                    --> Idle(initial_size)

Triggers while Loading, or with the window already covering the result, are
no-ops.
"""
from typing import List, Optional, Sequence, TypeVar

from .query import advance_window
from .timers import CancellableTimer
from ..utils.logger import get_logger

logger = get_logger()

T = TypeVar("T")


class RevealWindow:
    def __init__(self, initial_size: int = 9, increment: int = 6, delay: float = 0.5):
        if initial_size <= 0 or increment <= 0:
            raise ValueError("window sizes must be positive")
        self.initial_size = initial_size
        self.increment = increment
        self.delay = delay
        self.size = initial_size
        self._timer: Optional[CancellableTimer] = None

    @property
    def is_loading(self) -> bool:
        return self._timer is not None and self._timer.active

    def trigger(self, total_count: int) -> bool:
        """Sentinel became visible. Returns True if a growth step was scheduled."""
        if self.is_loading:
            return False
        if self.size >= total_count:
            return False
        self._timer = CancellableTimer(self.delay, self._grow, total_count)
        logger.debug(f"[SHOP] reveal scheduled: size={self.size} total={total_count}")
        return True

    def _grow(self, total_count: int) -> None:
        self.size = advance_window(self.size, total_count, self.increment)
        self._timer = None
        logger.debug(f"[SHOP] reveal grew window to {self.size}")

    def reset(self) -> None:
        self._cancel_pending()
        self.size = self.initial_size

    def close(self) -> None:
        self._cancel_pending()

    def _cancel_pending(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None

    def visible(self, items: Sequence[T]) -> List[T]:
        return list(items[:min(self.size, len(items))])

    def has_more(self, total_count: int) -> bool:
        return self.size < total_count

    def reached_end(self, total_count: int) -> bool:
        return total_count > 0 and not self.has_more(total_count) and not self.is_loading
