"""
commands.py
───────────
The input thread: turns key presses into schedule edits and acknowledgements.

Interval edits restart the countdown: the new deadline is the new interval
measured from the moment of the key press.  While a break is pending the
edit keys are ignored without a message.
"""

import enum
import threading
from typing import Callable, Optional

from breakclock.logging_setup import get_logger
from breakclock.models import format_time
from breakclock.schedule import Schedule

log = get_logger(__name__)

HELP_TEXT = "Commands: + longer interval  - shorter interval  ? help  q quit"

# Ctrl-C and Ctrl-D arrive as plain characters once the terminal is unbuffered.
_QUIT_KEYS = {"q", "\x03", "\x04"}


class CommandResult(enum.Enum):
    INCREASED  = "increased"
    DECREASED  = "decreased"
    AT_MINIMUM = "at_minimum"
    IGNORED    = "ignored"
    HELP       = "help"
    QUIT       = "quit"
    UNKNOWN    = "unknown"


class InputProcess:
    """
    Reads keys until quit and applies them to the schedule.

    ``read_key(timeout)`` returns one character, or None when nothing was
    typed within ``timeout`` seconds.
    """

    def __init__(self, schedule: Schedule, output,
                 read_key: Callable[[float], Optional[str]]):
        self.schedule = schedule
        self.output   = output
        self.read_key = read_key
        self.error: Optional[BaseException] = None

        self._thread = threading.Thread(
            target=self.run,
            daemon=True,
            name="break-input"
        )

    def start(self):
        self._thread.start()

    def join(self, timeout: Optional[float] = None):
        self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def run(self):
        poll = self.schedule.config.tick_period
        try:
            while not self.schedule.exit_is_requested():
                key = self.read_key(poll)
                if key is None:
                    continue
                if self.handle_key(key) is CommandResult.QUIT:
                    break
        except Exception as exc:
            log.exception("input thread failed")
            self.error = exc
            self.schedule.request_exit()

    # ── Commands ──────────────────────────────────────────────────────────────

    def handle_key(self, key: str) -> CommandResult:
        if key in ("+", "-"):
            return self._change_interval(key)
        if key == "?":
            self.output.status(HELP_TEXT)
            return CommandResult.HELP
        if key in _QUIT_KEYS:
            self.schedule.request_exit()
            log.debug("quit requested")
            return CommandResult.QUIT
        self.output.status("Unknown command (press ? for help)")
        return CommandResult.UNKNOWN

    def _change_interval(self, key: str) -> CommandResult:
        sched = self.schedule
        cfg   = sched.config

        # Read the deadline before the break flag: if the clock starts a break
        # after this point, the compare_and_set below sees the moved deadline.
        deadline = sched.next_deadline.load()
        if sched.break_active.load():
            return CommandResult.IGNORED

        current = sched.interval.load()
        if key == "+":
            new_interval, result = current + cfg.interval_step, CommandResult.INCREASED
        else:
            new_interval = max(current - cfg.interval_step, cfg.min_interval)
            if new_interval == current:
                self.output.status(f"Break interval already at minimum ({format_time(current)})")
                return CommandResult.AT_MINIMUM
            result = CommandResult.DECREASED

        if not sched.next_deadline.compare_and_set(deadline, sched.elapsed() + new_interval):
            # The clock moved the deadline: a break has just started.
            return CommandResult.IGNORED
        sched.interval.store(new_interval)

        log.debug("interval %ds -> %ds", current, new_interval)
        self.output.status(f"Break interval {result.value} to {format_time(new_interval)}")
        return result
