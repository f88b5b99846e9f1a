"""Shared fakes: a controllable monotonic clock, an output recorder, a ticker that never sleeps."""

from __future__ import annotations

import threading
from typing import Callable, Iterable, Optional

import pytest

from breakclock.models import TimerConfig
from breakclock.schedule import Schedule
from breakclock.ticker import Ticker


class FakeTime:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self._lock = threading.Lock()

    def __call__(self) -> float:
        with self._lock:
            return self.now

    def advance(self, seconds: float) -> None:
        with self._lock:
            self.now += seconds


class RecordingOutput:
    def __init__(self) -> None:
        self.statuses: list[str] = []
        self.notices: list[str] = []
        self.banners: list[list[str]] = []

    def status(self, text: str) -> None:
        self.statuses.append(text)

    def notify(self, text: str) -> None:
        self.notices.append(text)

    def banner(self, lines: Iterable[str]) -> None:
        self.banners.append(list(lines))

    @property
    def last_status(self) -> Optional[str]:
        return self.statuses[-1] if self.statuses else None


class ManualTicker(Ticker):
    """Ticker whose wait returns at once, optionally running a hook with the requested delay."""

    def __init__(self, period: float = 1.0, on_wait: Optional[Callable[[float], None]] = None) -> None:
        super().__init__(period)
        self.waits: list[float] = []
        self._on_wait = on_wait

    def wait(self, timeout: Optional[float] = None) -> bool:
        delay = self.period if timeout is None else min(self.period, timeout)
        self.waits.append(delay)
        if self._on_wait is not None:
            self._on_wait(delay)
        return not self.cancelled


@pytest.fixture
def config() -> TimerConfig:
    return TimerConfig()


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def schedule(config: TimerConfig, fake_time: FakeTime) -> Schedule:
    return Schedule(config, time_source=fake_time)


@pytest.fixture
def output() -> RecordingOutput:
    return RecordingOutput()
