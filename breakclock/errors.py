"""Error taxonomy for the break timer."""


class BreakClockError(Exception):
    """Base exception for breakclock."""


class TerminalSetupError(BreakClockError):
    """Raised when the terminal cannot be put into unbuffered mode."""
