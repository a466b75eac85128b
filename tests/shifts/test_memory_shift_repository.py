from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime, timedelta

import pytest

from shift_tracker.core.enums import BreakKind, ShiftStatus
from shift_tracker.core.exceptions import ConflictError
from shift_tracker.shifts.memory_shift_repository import InMemoryShiftRepository
from shift_tracker.shifts.model import Break, GeoPoint, Shift
from shift_tracker.shifts.service import ShiftLifecycleService

T0 = datetime(2026, 2, 2, 8, 0, 0)


def _new(employee_id: int = 1, *, at: datetime = T0) -> Shift:
    return Shift(
        shift_id=None,
        employee_id=employee_id,
        status=ShiftStatus.ACTIVE,
        start_time=at,
        start_location=GeoPoint(longitude=0.0, latitude=0.0),
        created_at=at,
    )


def test_create_assigns_ids():
    repo = InMemoryShiftRepository()
    a = repo.create(_new(1))
    b = repo.create(_new(2))
    assert a.shift_id == 1 and b.shift_id == 2
    assert repo.get_by_id(1) == a


def test_create_rejects_second_open_shift():
    repo = InMemoryShiftRepository()
    repo.create(_new(1))
    with pytest.raises(ConflictError):
        repo.create(_new(1))


def test_save_checks_previous_status():
    repo = InMemoryShiftRepository()
    shift = repo.create(_new(1))

    on_break = repo.save(replace(shift, status=ShiftStatus.ON_BREAK))
    assert repo.find_open_shift(1).status == ShiftStatus.ON_BREAK

    # a second start-break computed from the stale ACTIVE copy loses
    with pytest.raises(ConflictError):
        repo.save(replace(shift, status=ShiftStatus.ON_BREAK))

    repo.save(replace(on_break, status=ShiftStatus.COMPLETED, end_time=T0 + timedelta(hours=1)))
    assert repo.find_open_shift(1) is None

    with pytest.raises(ConflictError):
        repo.save(replace(on_break, status=ShiftStatus.COMPLETED))


def test_save_requires_id():
    with pytest.raises(ValueError):
        InMemoryShiftRepository().save(_new(1))


def test_find_by_employee_newest_first():
    repo = InMemoryShiftRepository()
    first = repo.create(_new(1, at=T0))
    repo.save(replace(first, status=ShiftStatus.COMPLETED, end_time=T0 + timedelta(hours=1)))
    second = repo.create(_new(1, at=T0 + timedelta(hours=2)))

    assert [s.shift_id for s in repo.find_by_employee(1)] == [second.shift_id, first.shift_id]
    assert repo.find_by_employee(2) == []


def test_save_bumps_version():
    repo = InMemoryShiftRepository()
    shift = repo.create(_new(1))
    assert shift.version == 0

    on_break = repo.save(replace(shift, status=ShiftStatus.ON_BREAK))
    assert on_break.version == 1
    assert repo.get_by_id(shift.shift_id).version == 1


def test_stale_copy_cannot_overwrite_completed_break():
    repo = InMemoryShiftRepository()
    svc = ShiftLifecycleService(repo)
    svc.start_shift(1, longitude=0.0, latitude=0.0, now=T0)

    stale = repo.find_open_shift(1)
    svc.start_break(1, "lunch", longitude=0.0, latitude=0.0, now=T0 + timedelta(minutes=30))
    svc.end_break(1, longitude=0.0, latitude=0.0, now=T0 + timedelta(minutes=45))

    # status is ACTIVE again, but the breaks in the stale copy are outdated
    short = Break(break_kind=BreakKind.SHORT, start_time=T0 + timedelta(minutes=50), location=GeoPoint(0.0, 0.0))
    with pytest.raises(ConflictError):
        repo.save(replace(stale, status=ShiftStatus.ON_BREAK, breaks=stale.breaks + (short,)))

    stored = repo.find_open_shift(1)
    assert [b.break_kind for b in stored.breaks] == [BreakKind.LUNCH]
    assert stored.status == ShiftStatus.ACTIVE


def test_reads_while_other_employees_create():
    repo = InMemoryShiftRepository()
    errors = []

    def writer(employee_base):
        for i in range(300):
            repo.create(_new(employee_base + i))

    def reader():
        try:
            for _ in range(300):
                repo.find_all()
                repo.find_by_employee(1)
                repo.find_open_shift(1)
        except RuntimeError as exc:
            errors.append(exc)

    threads = [threading.Thread(target=writer, args=(base,)) for base in (0, 1000, 2000)]
    threads += [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(repo.find_all()) == 900
