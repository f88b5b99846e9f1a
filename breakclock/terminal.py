"""
terminal.py
───────────
Thin terminal wrappers: unbuffered key input, the status line, and a guard
that always puts the terminal back the way it found it.

POSIX only (termios / tty / select).
"""

import os
import sys
import tty
import select
import termios
from typing import Iterable, Optional

from breakclock.errors import TerminalSetupError


class Ansi:
    """ANSI escape sequences used by the status line."""
    CLEAR_LINE  = "\x1b[2K"
    HIDE_CURSOR = "\x1b[?25l"
    SHOW_CURSOR = "\x1b[?25h"
    GREEN       = "\x1b[32m"
    YELLOW      = "\x1b[33m"
    RESET_FG    = "\x1b[39m"


ESCAPE = "\x1b"
EOF_KEY = "\x04"


class TerminalOutput:
    """
    Writes status lines to a text stream.  Every write is flushed and any
    OSError goes straight back to the caller.
    """

    def __init__(self, stream=None):
        self.stream = stream or sys.stdout

    def status(self, text: str):
        """Replace the current line with ``text``."""
        self._write(f"\r{Ansi.CLEAR_LINE}{text}")

    def notify(self, text: str):
        """Print ``text`` highlighted on its own line, leaving it on screen."""
        self._write(f"\r{Ansi.CLEAR_LINE}{Ansi.YELLOW}{text}{Ansi.GREEN}\n")

    def banner(self, lines: Iterable[str]):
        self._write("".join(f"\r{line}\n" for line in lines))

    def _write(self, data: str):
        self.stream.write(data)
        self.stream.flush()


class TerminalSession:
    """
    Context manager owning the terminal for the lifetime of the timer.

    Entering puts stdin into cbreak mode (no line buffering, no echo), hides
    the cursor and switches to green.  Leaving restores all of it, whether
    the body returned, raised, or was interrupted.
    """

    def __init__(self, stdin=None, stdout=None):
        self.stdin  = stdin or sys.stdin
        self.output = TerminalOutput(stdout)
        self._fd: Optional[int] = None
        self._saved = None

    def __enter__(self) -> "TerminalSession":
        try:
            fd = self.stdin.fileno()
            if not os.isatty(fd):
                raise TerminalSetupError("standard input is not a terminal")
            self._saved = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        except (OSError, termios.error) as exc:
            raise TerminalSetupError(f"cannot switch terminal to unbuffered mode: {exc}") from exc
        self._fd = fd
        self.output._write(f"{Ansi.HIDE_CURSOR}{Ansi.GREEN}")
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            self.output._write(f"\r{Ansi.CLEAR_LINE}{Ansi.RESET_FG}{Ansi.SHOW_CURSOR}")
        finally:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
        return False

    def read_key(self, timeout: float) -> Optional[str]:
        """
        Wait up to ``timeout`` seconds for a key press.

        Returns the character typed, None if nothing arrived, EOF_KEY at end
        of input, and ESCAPE for escape sequences (arrow keys and the like),
        whose remaining bytes are discarded.
        """
        fd = self.stdin.fileno()
        readable, _, _ = select.select([fd], [], [], timeout)
        if not readable:
            return None
        data = os.read(fd, 1)
        if not data:
            return EOF_KEY
        if data == b"\x1b":
            while select.select([fd], [], [], 0.05)[0]:
                if not os.read(fd, 8):
                    break
            return ESCAPE
        if data[0] >= 0x80:
            # Rest of a multi-byte character; none of the commands need it.
            while select.select([fd], [], [], 0)[0]:
                if not os.read(fd, 8):
                    break
            return data.decode("latin-1")
        return data.decode("ascii")
