"""
clock.py
────────
The clock thread: counts down to the next break and nags once it arrives.

State machine:

    Counting ──deadline reached──▶ BreakPending ──reminder cap hit──▶ Exhausted
                                       (one reminder per repeat interval)

A break lasts until the user quits or the reminder cap is hit.

Only this thread writes reminder_count and break_active; see schedule.py
for the full writer table.
"""

import enum
import threading
from typing import Optional

from breakclock.logging_setup import get_logger
from breakclock.models import format_time
from breakclock.schedule import Schedule
from breakclock.ticker import Ticker

log = get_logger(__name__)

# Shortest sleep between ticks, so a deadline a few microseconds away
# does not turn the loop into a spin.
_MIN_WAIT = 0.05

BREAK_MESSAGE     = "Time to take a break!"
EXHAUSTED_MESSAGE = "That was the last reminder. Exiting."


class TickResult(enum.Enum):
    COUNTING      = "counting"
    BREAK_PENDING = "break_pending"
    REMINDED      = "reminded"
    EXHAUSTED     = "exhausted"


class ClockProcess:
    """
    Drives the notification cycle independently of user input.

    ``output`` needs ``status(text)`` (overwrite the current line) and
    ``notify(text)`` (a line that stays on screen).
    """

    def __init__(self, schedule: Schedule, output, ticker: Optional[Ticker] = None):
        self.schedule = schedule
        self.output   = output
        self.ticker   = ticker or Ticker(schedule.config.tick_period)
        self.error: Optional[BaseException] = None

        self._thread = threading.Thread(
            target=self.run,
            daemon=True,
            name="break-clock"
        )

    def start(self):
        self._thread.start()

    def stop(self):
        """Ask the loop to finish and wake it if it is sleeping."""
        self.schedule.request_exit()
        self.ticker.cancel()

    def join(self, timeout: Optional[float] = None):
        self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    # ── Loop ──────────────────────────────────────────────────────────────────

    def run(self):
        try:
            while not self.schedule.exit_is_requested():
                if self.tick() is TickResult.EXHAUSTED:
                    break
                if not self.ticker.wait(self.next_wait()):
                    break
        except Exception as exc:
            # Re-raised by the coordinator once both threads are down.
            log.exception("clock thread failed")
            self.error = exc
            self.schedule.request_exit()

    def tick(self) -> TickResult:
        """Run one wake-check cycle against the schedule."""
        sched = self.schedule
        cfg   = sched.config

        snap     = sched.snapshot()
        elapsed  = snap.elapsed
        deadline = snap.next_deadline

        if elapsed < deadline:
            if snap.break_active:
                return TickResult.BREAK_PENDING
            self.output.status(f"Time until next break: {format_time(snap.remaining)}")
            return TickResult.COUNTING

        starting_break = not snap.break_active
        if starting_break:
            sched.break_active.store(True)
            log.debug("break started at %.1fs", elapsed)

        if sched.reminder_count.load() >= cfg.max_reminders:
            log.debug("reminder cap of %d reached", cfg.max_reminders)
            sched.request_exit()
            self.output.notify(EXHAUSTED_MESSAGE)
            return TickResult.EXHAUSTED

        if not sched.next_deadline.compare_and_set(
                deadline, deadline + cfg.reminder_repeat_interval):
            # An interval edit rebased the deadline before it saw the break.
            if starting_break:
                sched.break_active.store(False)
            return TickResult.COUNTING

        count = sched.reminder_count.update(lambda n: n + 1)
        log.debug("reminder %d/%d fired", count, cfg.max_reminders)
        self.output.notify(BREAK_MESSAGE)
        return TickResult.REMINDED

    def next_wait(self) -> float:
        """Seconds until the next tick: at most one period, less if the deadline is nearer."""
        period = self.ticker.period
        if self.schedule.break_active.load():
            return period
        floor     = min(_MIN_WAIT, period)
        remaining = self.schedule.next_deadline.load() - self.schedule.elapsed()
        return max(min(period, remaining), floor)
