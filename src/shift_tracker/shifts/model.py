from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import BreakKind, ShiftStatus

# Stored status a shift must still have for a save with the new status to apply.
PREVIOUS_STATUSES: dict[ShiftStatus, tuple[ShiftStatus, ...]] = {
    ShiftStatus.ACTIVE: (ShiftStatus.ON_BREAK,),
    ShiftStatus.ON_BREAK: (ShiftStatus.ACTIVE,),
    ShiftStatus.COMPLETED: (ShiftStatus.ACTIVE, ShiftStatus.ON_BREAK),
}


@dataclass(frozen=True)
class GeoPoint:
    """A location checkpoint. Always (longitude, latitude), in that order."""

    longitude: float
    latitude: float

    def as_coordinates(self) -> list[float]:
        return [self.longitude, self.latitude]


@dataclass(frozen=True)
class Break:
    """One pause within a shift.

    ``location`` holds the start coordinates until the break ends, then the
    end coordinates overwrite it.
    """

    break_kind: BreakKind
    start_time: datetime
    location: GeoPoint
    end_time: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None


@dataclass(frozen=True)
class Shift:
    """Domain entity: one continuous work period for one employee.

    Note: Pure data object; transitions live in ShiftLifecycleService.
    """

    shift_id: Optional[int]
    employee_id: int
    status: ShiftStatus
    start_time: datetime
    start_location: GeoPoint
    created_at: datetime
    end_time: Optional[datetime] = None
    end_location: Optional[GeoPoint] = None
    breaks: tuple[Break, ...] = ()
    total_work_duration: float = 0.0
    total_break_duration: float = 0.0
    # bumped by the repository on every save; a save carrying an older value is rejected
    version: int = 0

    @property
    def is_open(self) -> bool:
        return self.status.is_open

    @property
    def open_break(self) -> Optional[Break]:
        """The trailing break if it has not ended yet."""
        if self.breaks and self.breaks[-1].is_open:
            return self.breaks[-1]
        return None


@dataclass(frozen=True)
class EmployeeRef:
    """Employee projection attached to shifts in the admin listing."""

    employee_id: int
    full_name: str
    email: Optional[str] = None


@dataclass(frozen=True)
class AdminShiftRow:
    shift: Shift
    employee: Optional[EmployeeRef]
