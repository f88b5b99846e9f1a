"""
schedule.py
───────────
The single shared Schedule read and written by the clock and input threads.

Concurrency notes:
  - Every field lives in its own AtomicCell: load/store/update/CAS are each
    indivisible, but there is no transaction spanning two fields.
  - Lost updates are prevented by keeping one writer per field instead of
    locking the whole schedule:

        interval          InputProcess only
        reminder_count    ClockProcess only
        break_active      ClockProcess only
        next_deadline     both; InputProcess only outside a break and
                          only through compare_and_set
        exit_requested    either, set once and never cleared

  - Deadlines are monotonic seconds elapsed since the schedule was created,
    so wall-clock adjustments never move a break.

If a third thread ever needs to write here, replace the per-field cells with
one lock around the whole schedule.
"""

import time
import threading
from typing import Any, Callable, Optional

from breakclock.models import ScheduleSnapshot, TimerConfig


class AtomicCell:
    """A value whose every operation is indivisible with respect to the others."""

    def __init__(self, value: Any):
        self._value = value
        self._lock  = threading.Lock()

    def load(self) -> Any:
        with self._lock:
            return self._value

    def store(self, value: Any) -> None:
        with self._lock:
            self._value = value

    def update(self, fn: Callable[[Any], Any]) -> Any:
        """Replace the value with ``fn(value)`` and return the new value."""
        with self._lock:
            self._value = fn(self._value)
            return self._value

    def compare_and_set(self, expected: Any, new: Any) -> bool:
        with self._lock:
            if self._value != expected:
                return False
            self._value = new
            return True

    def __repr__(self) -> str:
        return f"AtomicCell({self.load()!r})"


class Schedule:
    """
    Shared timer state, created once at startup and passed explicitly to
    both processes.  Nothing is persisted.
    """

    def __init__(self, config: TimerConfig,
                 time_source: Optional[Callable[[], float]] = None):
        self.config = config
        self._now   = time_source or time.monotonic
        self._start = self._now()

        self.interval       = AtomicCell(config.default_interval)
        self.next_deadline  = AtomicCell(float(config.default_interval))
        self.reminder_count = AtomicCell(0)
        self.break_active   = AtomicCell(False)
        self.exit_requested = AtomicCell(False)

    def elapsed(self) -> float:
        """Monotonic seconds since the schedule was created."""
        return self._now() - self._start

    def request_exit(self) -> None:
        self.exit_requested.store(True)

    def exit_is_requested(self) -> bool:
        return self.exit_requested.load()

    def snapshot(self) -> ScheduleSnapshot:
        elapsed  = self.elapsed()
        deadline = self.next_deadline.load()
        return ScheduleSnapshot(
            interval=self.interval.load(),
            next_deadline=deadline,
            elapsed=elapsed,
            remaining=max(deadline - elapsed, 0.0),
            reminder_count=self.reminder_count.load(),
            break_active=self.break_active.load(),
            exit_requested=self.exit_requested.load(),
        )
