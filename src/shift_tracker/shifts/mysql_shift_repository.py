from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence

import mysql.connector

from ..core.enums import BreakKind, ShiftStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import PREVIOUS_STATUSES, AdminShiftRow, Break, EmployeeRef, GeoPoint, Shift
from .repository import ShiftRepository

_SHIFT_COLUMNS = """
    s.shift_id, s.employee_id, s.status, s.start_time, s.end_time,
    s.start_longitude, s.start_latitude, s.end_longitude, s.end_latitude,
    s.total_work_duration, s.total_break_duration, s.created_at, s.version
"""


def _placeholders(count: int) -> str:
    return ",".join(["%s"] * count)


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_open_shift(self, employee_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SHIFT_COLUMNS}
                FROM shifts s
                WHERE s.employee_id=%s AND s.status IN (%s,%s)
                ORDER BY s.created_at DESC
                LIMIT 1
                """,
                (employee_id, ShiftStatus.ACTIVE.value, ShiftStatus.ON_BREAK.value),
            )
            row = fetchone(cur)
            if not row:
                return None
            breaks = self._load_breaks(cur, [int(row["shift_id"])])
            return self._to_shift(row, breaks)

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SHIFT_COLUMNS}
                FROM shifts s
                WHERE s.shift_id=%s
                """,
                (shift_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            breaks = self._load_breaks(cur, [int(row["shift_id"])])
            return self._to_shift(row, breaks)

    def create(self, shift: Shift) -> Shift:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO shifts(
                        employee_id, status, start_time, end_time,
                        start_longitude, start_latitude, end_longitude, end_latitude,
                        total_work_duration, total_break_duration, created_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        shift.employee_id,
                        shift.status.value,
                        shift.start_time,
                        shift.end_time,
                        shift.start_location.longitude,
                        shift.start_location.latitude,
                        shift.end_location.longitude if shift.end_location else None,
                        shift.end_location.latitude if shift.end_location else None,
                        shift.total_work_duration,
                        shift.total_break_duration,
                        shift.created_at,
                    ),
                )
                shift_id = int(cur.lastrowid)
                self._insert_breaks(cur, shift_id, shift.breaks)
        except mysql.connector.IntegrityError as exc:
            if is_duplicate_key(exc):
                raise ConflictError("You already have an active shift") from exc
            raise
        return replace(shift, shift_id=shift_id, version=0)

    def save(self, shift: Shift) -> Shift:
        if shift.shift_id is None:
            raise ValueError("Cannot save a shift that was never created")

        previous = PREVIOUS_STATUSES[shift.status]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE shifts
                SET status=%s, end_time=%s, end_longitude=%s, end_latitude=%s,
                    total_work_duration=%s, total_break_duration=%s, version=version+1
                WHERE shift_id=%s AND version=%s AND status IN ({_placeholders(len(previous))})
                """,
                (
                    shift.status.value,
                    shift.end_time,
                    shift.end_location.longitude if shift.end_location else None,
                    shift.end_location.latitude if shift.end_location else None,
                    shift.total_work_duration,
                    shift.total_break_duration,
                    shift.shift_id,
                    shift.version,
                    *(s.value for s in previous),
                ),
            )
            if cur.rowcount == 0:
                # raising inside db_cursor rolls the transaction back
                raise ConflictError(f"Shift {shift.shift_id} was modified by another request")

            # breaks are append-only except the last one; rewriting them keeps
            # the stored sequence identical to the entity
            cur.execute("DELETE FROM shift_breaks WHERE shift_id=%s", (shift.shift_id,))
            self._insert_breaks(cur, shift.shift_id, shift.breaks)
        return replace(shift, version=shift.version + 1)

    def find_by_employee(self, employee_id: int) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SHIFT_COLUMNS}
                FROM shifts s
                WHERE s.employee_id=%s
                ORDER BY s.created_at DESC, s.shift_id DESC
                """,
                (employee_id,),
            )
            rows = fetchall(cur)
            breaks = self._load_breaks(cur, [int(r["shift_id"]) for r in rows])
            return [self._to_shift(r, breaks) for r in rows]

    def find_all(self) -> Sequence[AdminShiftRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SHIFT_COLUMNS}, e.full_name, e.email
                FROM shifts s
                LEFT JOIN employees e ON e.employee_id = s.employee_id
                ORDER BY s.created_at DESC, s.shift_id DESC
                """
            )
            rows = fetchall(cur)
            breaks = self._load_breaks(cur, [int(r["shift_id"]) for r in rows])
            return [
                AdminShiftRow(
                    shift=self._to_shift(r, breaks),
                    employee=(
                        EmployeeRef(
                            employee_id=int(r["employee_id"]),
                            full_name=r["full_name"],
                            email=r.get("email"),
                        )
                        if r.get("full_name") is not None
                        else None
                    ),
                )
                for r in rows
            ]

    def _insert_breaks(self, cur, shift_id: int, breaks: Sequence[Break]) -> None:
        if not breaks:
            return
        cur.executemany(
            """
            INSERT INTO shift_breaks(shift_id, position, break_kind, start_time, end_time, longitude, latitude)
            VALUES(%s,%s,%s,%s,%s,%s,%s)
            """,
            [
                (
                    shift_id,
                    position,
                    b.break_kind.value,
                    b.start_time,
                    b.end_time,
                    b.location.longitude,
                    b.location.latitude,
                )
                for position, b in enumerate(breaks)
            ],
        )

    def _load_breaks(self, cur, shift_ids: List[int]) -> Dict[int, List[Break]]:
        out: Dict[int, List[Break]] = {sid: [] for sid in shift_ids}
        if not shift_ids:
            return out
        cur.execute(
            f"""
            SELECT shift_id, position, break_kind, start_time, end_time, longitude, latitude
            FROM shift_breaks
            WHERE shift_id IN ({_placeholders(len(shift_ids))})
            ORDER BY shift_id, position
            """,
            tuple(shift_ids),
        )
        for r in fetchall(cur):
            out[int(r["shift_id"])].append(
                Break(
                    break_kind=BreakKind(r["break_kind"]),
                    start_time=r["start_time"],
                    end_time=r.get("end_time"),
                    location=GeoPoint(longitude=float(r["longitude"]), latitude=float(r["latitude"])),
                )
            )
        return out

    @staticmethod
    def _to_shift(row: Dict[str, Any], breaks: Dict[int, List[Break]]) -> Shift:
        shift_id = int(row["shift_id"])
        end_location = None
        if row.get("end_longitude") is not None and row.get("end_latitude") is not None:
            end_location = GeoPoint(longitude=float(row["end_longitude"]), latitude=float(row["end_latitude"]))
        return Shift(
            shift_id=shift_id,
            employee_id=int(row["employee_id"]),
            status=ShiftStatus(row["status"]),
            start_time=row["start_time"],
            end_time=row.get("end_time"),
            start_location=GeoPoint(longitude=float(row["start_longitude"]), latitude=float(row["start_latitude"])),
            end_location=end_location,
            breaks=tuple(breaks.get(shift_id, ())),
            total_work_duration=float(row.get("total_work_duration") or 0.0),
            total_break_duration=float(row.get("total_break_duration") or 0.0),
            created_at=row["created_at"],
            version=int(row.get("version") or 0),
        )
