"""breakclock: a terminal break-reminder timer."""

__version__ = "1.0.0"
