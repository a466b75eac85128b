from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AdminShiftRow, Shift


class ShiftRepository(Protocol):
    """Durable storage for shifts.

    Implementations must keep "find open shift" and "write" atomic per
    employee: ``create`` raises ConflictError when the employee already has an
    open shift, ``save`` raises ConflictError when the stored ``version``
    differs from the one the caller loaded or the stored status is not one of
    ``PREVIOUS_STATUSES[shift.status]`` (another request got there first).
    A successful ``save`` returns the shift with its version bumped.
    """

    def find_open_shift(self, employee_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def create(self, shift: Shift) -> Shift:
        raise NotImplementedError

    def save(self, shift: Shift) -> Shift:
        raise NotImplementedError

    def find_by_employee(self, employee_id: int) -> Sequence[Shift]:
        """Newest first by creation time."""
        raise NotImplementedError

    def find_all(self) -> Sequence[AdminShiftRow]:
        """All shifts with the owning employee attached, newest first."""
        raise NotImplementedError
