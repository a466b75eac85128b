"""Work/break duration derivation for closed shifts.

All values are minutes as floats. Nothing is rounded or clamped here; a shift
whose breaks exceed its length (only possible through manual edits) yields a
negative work duration.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from ..common.datetime_utils import minutes_between
from .model import Break, Shift


@dataclass(frozen=True)
class ShiftDurations:
    work_minutes: float
    break_minutes: float


def total_break_minutes(breaks: Iterable[Break]) -> float:
    # breaks without an end time contribute nothing
    return sum(
        (minutes_between(b.start_time, b.end_time) for b in breaks if b.end_time is not None),
        0.0,
    )


def compute_durations(shift: Shift) -> ShiftDurations:
    if shift.end_time is None:
        raise ValueError("Cannot compute durations for a shift without an end time")

    break_minutes = total_break_minutes(shift.breaks)
    shift_minutes = minutes_between(shift.start_time, shift.end_time)
    return ShiftDurations(work_minutes=shift_minutes - break_minutes, break_minutes=break_minutes)


def apply_durations(shift: Shift) -> Shift:
    durations = compute_durations(shift)
    return replace(
        shift,
        total_work_duration=durations.work_minutes,
        total_break_duration=durations.break_minutes,
    )


def format_duration(minutes: float) -> str:
    """Render minutes as ``"Xh Ym"`` for display."""
    sign = "-" if minutes < 0 else ""
    hours, mins = divmod(int(round(abs(minutes))), 60)
    return f"{sign}{hours}h {mins}m"
