from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable

from ..core.enums import ShiftStatus
from .model import Shift


@dataclass(frozen=True)
class ShiftStatistics:
    shifts_completed: int
    total_work_minutes: float
    avg_work_minutes: float
    current_week_work_minutes: float

    @property
    def total_hours(self) -> float:
        return round(self.total_work_minutes / 60, 1)

    @property
    def avg_hours_per_shift(self) -> float:
        return round(self.avg_work_minutes / 60, 1)

    @property
    def current_week_hours(self) -> float:
        return round(self.current_week_work_minutes / 60, 1)


def start_of_week(today: datetime) -> datetime:
    """Midnight of the Sunday that starts ``today``'s week."""
    days_since_sunday = (today.weekday() + 1) % 7
    midnight = today.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=days_since_sunday)


def summarize_shifts(shifts: Iterable[Shift], *, today: datetime) -> ShiftStatistics:
    """Aggregate stored work totals of completed shifts."""

    completed = [s for s in shifts if s.status == ShiftStatus.COMPLETED]
    total = sum((s.total_work_duration for s in completed), 0.0)
    avg = total / len(completed) if completed else 0.0

    week_start = start_of_week(today)
    this_week = sum(
        (s.total_work_duration for s in completed if s.end_time is not None and s.end_time >= week_start),
        0.0,
    )
    return ShiftStatistics(
        shifts_completed=len(completed),
        total_work_minutes=total,
        avg_work_minutes=avg,
        current_week_work_minutes=this_week,
    )
