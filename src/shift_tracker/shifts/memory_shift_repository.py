from __future__ import annotations

import threading
from collections import defaultdict
from dataclasses import replace
from typing import Optional, Sequence

from ..core.exceptions import ConflictError
from ..users.repository import EmployeeRepository
from .model import PREVIOUS_STATUSES, AdminShiftRow, EmployeeRef, Shift
from .repository import ShiftRepository


class InMemoryShiftRepository(ShiftRepository):
    """Process-local store, used for development and tests.

    Writes are serialized per employee, so the open-shift check and the
    write happen under the same lock. Reads iterate a snapshot taken under
    the store-wide lock.
    """

    def __init__(self, employees: Optional[EmployeeRepository] = None):
        self._employees = employees
        self._shifts: dict[int, Shift] = {}
        self._next_id = 1
        self._id_lock = threading.Lock()
        self._employee_locks: defaultdict[int, threading.Lock] = defaultdict(threading.Lock)

    def _lock_for(self, employee_id: int) -> threading.Lock:
        with self._id_lock:
            return self._employee_locks[int(employee_id)]

    def _snapshot(self) -> list[Shift]:
        with self._id_lock:
            return list(self._shifts.values())

    def _open_for(self, employee_id: int) -> Optional[Shift]:
        for shift in self._snapshot():
            if shift.employee_id == employee_id and shift.is_open:
                return shift
        return None

    def find_open_shift(self, employee_id: int) -> Optional[Shift]:
        with self._lock_for(employee_id):
            return self._open_for(employee_id)

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with self._id_lock:
            return self._shifts.get(int(shift_id))

    def create(self, shift: Shift) -> Shift:
        with self._lock_for(shift.employee_id):
            if shift.is_open and self._open_for(shift.employee_id) is not None:
                raise ConflictError("You already have an active shift")
            with self._id_lock:
                shift_id = self._next_id
                self._next_id += 1
                stored = replace(shift, shift_id=shift_id, version=0)
                self._shifts[shift_id] = stored
            return stored

    def save(self, shift: Shift) -> Shift:
        if shift.shift_id is None:
            raise ValueError("Cannot save a shift that was never created")

        with self._lock_for(shift.employee_id):
            current = self.get_by_id(shift.shift_id)
            if (
                current is None
                or current.version != shift.version
                or current.status not in PREVIOUS_STATUSES[shift.status]
            ):
                raise ConflictError(f"Shift {shift.shift_id} was modified by another request")
            stored = replace(shift, version=shift.version + 1)
            with self._id_lock:
                self._shifts[shift.shift_id] = stored
            return stored

    def find_by_employee(self, employee_id: int) -> Sequence[Shift]:
        items = [s for s in self._snapshot() if s.employee_id == employee_id]
        return self._newest_first(items)

    def find_all(self) -> Sequence[AdminShiftRow]:
        return [AdminShiftRow(shift=s, employee=self._employee_ref(s.employee_id)) for s in self._newest_first(self._snapshot())]

    def _employee_ref(self, employee_id: int) -> Optional[EmployeeRef]:
        if not self._employees:
            return None
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            return None
        return EmployeeRef(employee_id=employee.employee_id, full_name=employee.full_name, email=employee.email)

    @staticmethod
    def _newest_first(shifts) -> list[Shift]:
        return sorted(shifts, key=lambda s: (s.created_at, s.shift_id or 0), reverse=True)
