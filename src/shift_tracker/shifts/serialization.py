"""JSON shapes for the shift API.

Locations follow GeoJSON: ``{"type": "Point", "coordinates": [longitude, latitude]}``.
"""

from __future__ import annotations

from typing import Any, Optional

from ..common.datetime_utils import isoformat_or_none
from .model import AdminShiftRow, Break, EmployeeRef, GeoPoint, Shift
from .reporting import ShiftStatistics


def location_to_dict(point: Optional[GeoPoint]) -> Optional[dict[str, Any]]:
    if point is None:
        return None
    return {"type": "Point", "coordinates": point.as_coordinates()}


def break_to_dict(b: Break) -> dict[str, Any]:
    return {
        "type": b.break_kind.value,
        "startTime": isoformat_or_none(b.start_time),
        "endTime": isoformat_or_none(b.end_time),
        "location": location_to_dict(b.location),
    }


def employee_to_dict(employee: Optional[EmployeeRef]) -> Optional[dict[str, Any]]:
    if employee is None:
        return None
    return {"id": employee.employee_id, "name": employee.full_name, "email": employee.email}


def shift_to_dict(shift: Shift) -> dict[str, Any]:
    return {
        "id": shift.shift_id,
        "employee": shift.employee_id,
        "status": shift.status.value,
        "startTime": isoformat_or_none(shift.start_time),
        "endTime": isoformat_or_none(shift.end_time),
        "startLocation": location_to_dict(shift.start_location),
        "endLocation": location_to_dict(shift.end_location),
        "breaks": [break_to_dict(b) for b in shift.breaks],
        "totalWorkDuration": shift.total_work_duration,
        "totalBreakDuration": shift.total_break_duration,
        "createdAt": isoformat_or_none(shift.created_at),
    }


def admin_row_to_dict(row: AdminShiftRow) -> dict[str, Any]:
    data = shift_to_dict(row.shift)
    # populated form, as the admin view shows who owns each shift
    data["employee"] = employee_to_dict(row.employee) or {"id": row.shift.employee_id}
    return data


def statistics_to_dict(stats: ShiftStatistics) -> dict[str, Any]:
    return {
        "shiftsCompleted": stats.shifts_completed,
        "totalWorkMinutes": stats.total_work_minutes,
        "avgWorkMinutes": stats.avg_work_minutes,
        "currentWeekWorkMinutes": stats.current_week_work_minutes,
        "totalHours": stats.total_hours,
        "avgHoursPerShift": stats.avg_hours_per_shift,
        "currentWeekHours": stats.current_week_hours,
    }
