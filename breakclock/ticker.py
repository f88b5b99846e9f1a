"""
ticker.py
─────────
Periodic wake-up primitive for the clock thread.

A threading.Event doubles as the sleep and the cancellation signal, so
cancel() wakes a sleeping clock immediately instead of after the period.
"""

import threading
from typing import Optional


class Ticker:
    def __init__(self, period: float = 1.0):
        if period <= 0:
            raise ValueError("period must be positive")
        self.period     = period
        self._cancelled = threading.Event()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Sleep for at most ``min(period, timeout)`` seconds.

        Returns False when the ticker was cancelled, True otherwise.
        """
        delay = self.period if timeout is None else min(self.period, max(timeout, 0.0))
        return not self._cancelled.wait(timeout=delay)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()
