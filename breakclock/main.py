"""
main.py
───────
breakclock entry point.

Starts the clock thread and the input thread on one shared Schedule, waits
for both to finish, then hands the terminal back.

  - threading.Thread   one clock thread, one input thread
  - threading.Event    cancellation of the clock's sleep (Ticker)
  - termios / tty      unbuffered key input, restored on every exit path
"""

import os
import sys
import platform
from typing import Optional

from breakclock.clock import ClockProcess
from breakclock.commands import InputProcess
from breakclock.errors import TerminalSetupError
from breakclock.logging_setup import configure_logging, get_logger
from breakclock.models import TimerConfig, format_time
from breakclock.schedule import Schedule
from breakclock.terminal import TerminalSession

log = get_logger(__name__)


def banner_lines(config: TimerConfig) -> list[str]:
    step = format_time(config.interval_step)
    return [
        f"Break timer started, first break in {format_time(config.default_interval)}. Commands:",
        f"  +: Increase break interval by {step}",
        f"  -: Decrease break interval by {step}",
        "  ?: Show commands",
        "  q: Quit",
    ]


def run(config: Optional[TimerConfig] = None, session=None) -> int:
    """
    Run one interactive session and return the exit status.

    ``session`` defaults to a TerminalSession on the real stdin/stdout.
    Errors raised inside either thread are re-raised here after the
    terminal has been restored.
    """
    config  = config or TimerConfig()
    session = session or TerminalSession()

    print(f"[BREAKCLOCK] PID={os.getpid()} | Platform={platform.system()}")
    try:
        with session as term:
            _run_session(config, term)
    except TerminalSetupError as exc:
        log.error("terminal setup failed: %s", exc)
        print(f"[BREAKCLOCK] Cannot start: {exc}", file=sys.stderr)
        return 1

    print("[BREAKCLOCK] Shutdown complete.")
    return 0


def _run_session(config: TimerConfig, term):
    schedule = Schedule(config)
    term.output.banner(banner_lines(config))

    clock = ClockProcess(schedule, term.output)
    keys  = InputProcess(schedule, term.output, term.read_key)

    clock.start()
    keys.start()
    try:
        # Short joins keep the main thread responsive to Ctrl-C.
        while clock.is_alive() or keys.is_alive():
            if schedule.exit_is_requested():
                clock.stop()
            keys.join(timeout=0.1)
            clock.join(timeout=0.1)
    except KeyboardInterrupt:
        log.debug("interrupted")
    finally:
        clock.stop()
        clock.join()
        keys.join()

    for proc in (clock, keys):
        if proc.error is not None:
            raise proc.error


def main():
    configure_logging()
    try:
        code = run()
    except KeyboardInterrupt:
        # Ctrl-C before the threads were joined; the session already restored the terminal.
        log.debug("interrupted during startup")
        code = 0
    except OSError as exc:
        log.critical("terminal I/O failed: %s", exc)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
