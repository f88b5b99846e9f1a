"""AtomicCell operations and the shared Schedule."""

from __future__ import annotations

import threading

from breakclock.models import TimerConfig
from breakclock.schedule import AtomicCell, Schedule

from conftest import FakeTime


def test_atomic_cell_load_store_update() -> None:
    cell = AtomicCell(1)
    assert cell.load() == 1
    cell.store(5)
    assert cell.load() == 5
    assert cell.update(lambda v: v * 2) == 10
    assert cell.load() == 10


def test_compare_and_set_only_replaces_expected_value() -> None:
    cell = AtomicCell(3.0)
    assert cell.compare_and_set(3.0, 4.0) is True
    assert cell.compare_and_set(3.0, 9.0) is False
    assert cell.load() == 4.0


def test_concurrent_updates_are_not_lost() -> None:
    cell = AtomicCell(0)
    workers, per_worker = 8, 2000

    def bump() -> None:
        for _ in range(per_worker):
            cell.update(lambda v: v + 1)

    threads = [threading.Thread(target=bump) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert cell.load() == workers * per_worker


def test_new_schedule_starts_counting_from_default_interval(schedule: Schedule) -> None:
    snap = schedule.snapshot()
    assert snap.interval == 3000
    assert snap.next_deadline == 3000.0
    assert snap.elapsed == 0.0
    assert snap.remaining == 3000.0
    assert snap.reminder_count == 0
    assert snap.break_active is False
    assert snap.exit_requested is False


def test_elapsed_follows_the_time_source(schedule: Schedule, fake_time: FakeTime) -> None:
    fake_time.advance(42.5)
    assert schedule.elapsed() == 42.5


def test_snapshot_remaining_never_goes_negative(schedule: Schedule, fake_time: FakeTime) -> None:
    fake_time.advance(3100)
    assert schedule.snapshot().remaining == 0.0


def test_request_exit_is_sticky(schedule: Schedule) -> None:
    assert schedule.exit_is_requested() is False
    schedule.request_exit()
    schedule.request_exit()
    assert schedule.exit_is_requested() is True


def test_schedule_uses_monotonic_clock_by_default() -> None:
    sched = Schedule(TimerConfig())
    first = sched.elapsed()
    assert 0.0 <= first <= sched.elapsed()
