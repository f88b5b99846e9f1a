"""
models.py
─────────
Pydantic models shared by the clock and input processes.

TimerConfig is immutable and fixed at startup; ScheduleSnapshot is a
read-only copy of the shared schedule handed to the renderer.
"""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, model_validator


class TimerConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    default_interval: int = Field(50 * 60, gt=0)          # seconds
    min_interval: int = Field(5 * 60, gt=0)
    interval_step: int = Field(5 * 60, gt=0)
    max_reminders: int = Field(8, ge=0)
    reminder_repeat_interval: int = Field(5 * 60, gt=0)
    tick_period: float = Field(1.0, gt=0)                 # upper bound on one tick

    @model_validator(mode="after")
    def _default_not_below_minimum(self) -> "TimerConfig":
        if self.default_interval < self.min_interval:
            raise ValueError("default_interval must be >= min_interval")
        return self


class ScheduleSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    interval: int
    next_deadline: float
    elapsed: float
    remaining: float                       # never negative
    reminder_count: int
    break_active: bool
    exit_requested: bool


def format_time(seconds: float) -> str:
    """Render a duration as ``mm:ss``; minutes are not folded into hours."""
    total = max(int(seconds), 0)
    return f"{total // 60:02d}:{total % 60:02d}"
