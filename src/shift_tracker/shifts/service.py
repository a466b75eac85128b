from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import require_break_kind, require_coordinates
from ..core.enums import NotificationStatus, Role, ShiftStatus
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..notifications.gateway import NotificationGateway, NotificationOutcome
from .durations import apply_durations
from .model import AdminShiftRow, Break, Shift
from .reporting import ShiftStatistics, summarize_shifts
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShiftCompletion:
    """What ``end_shift`` hands back: the closed shift plus how the notice went."""

    shift: Shift
    notification: NotificationOutcome


class ShiftLifecycleService:
    """Use case: drive one employee's shift through start/break/end.

    Every operation is request-scoped: load the open shift, check the
    transition, persist the new value. Per-employee atomicity is the
    repository's job; this class only turns its write-time conflicts into
    ConflictError for the caller.
    """

    def __init__(self, shifts: ShiftRepository, notifier: Optional[NotificationGateway] = None):
        self._shifts = shifts
        self._notifier = notifier

    def start_shift(self, employee_id: int, *, longitude: Any, latitude: Any, now: Optional[datetime] = None) -> Shift:
        location = require_coordinates(longitude, latitude)
        now = now or now_utc()

        if self._shifts.find_open_shift(employee_id) is not None:
            raise ConflictError("You already have an active shift")

        shift = self._shifts.create(
            Shift(
                shift_id=None,
                employee_id=employee_id,
                status=ShiftStatus.ACTIVE,
                start_time=now,
                start_location=location,
                created_at=now,
            )
        )
        logger.info("Employee %s started shift %s", employee_id, shift.shift_id)
        return shift

    def start_break(
        self,
        employee_id: int,
        break_kind: Any,
        *,
        longitude: Any,
        latitude: Any,
        now: Optional[datetime] = None,
    ) -> Shift:
        kind = require_break_kind(break_kind)
        location = require_coordinates(longitude, latitude)
        now = now or now_utc()

        shift = self._shifts.find_open_shift(employee_id)
        if not shift or shift.status != ShiftStatus.ACTIVE:
            raise NotFoundError("No active shift found")

        updated = self._shifts.save(
            replace(
                shift,
                status=ShiftStatus.ON_BREAK,
                breaks=shift.breaks + (Break(break_kind=kind, start_time=now, location=location),),
            )
        )
        logger.info("Employee %s started %s break on shift %s", employee_id, kind.value, shift.shift_id)
        return updated

    def end_break(self, employee_id: int, *, longitude: Any, latitude: Any, now: Optional[datetime] = None) -> Shift:
        location = require_coordinates(longitude, latitude)
        now = now or now_utc()

        shift = self._shifts.find_open_shift(employee_id)
        if not shift or shift.status != ShiftStatus.ON_BREAK:
            raise NotFoundError("No shift on break found")

        current = shift.open_break
        if current is None:
            raise NotFoundError("No open break found")

        # the end coordinates replace the start coordinates of the break
        closed = replace(current, end_time=now, location=location)
        updated = self._shifts.save(
            replace(shift, status=ShiftStatus.ACTIVE, breaks=shift.breaks[:-1] + (closed,))
        )
        logger.info("Employee %s ended break on shift %s", employee_id, shift.shift_id)
        return updated

    def end_shift(
        self,
        employee_id: int,
        *,
        longitude: Any,
        latitude: Any,
        now: Optional[datetime] = None,
    ) -> ShiftCompletion:
        location = require_coordinates(longitude, latitude)
        now = now or now_utc()

        shift = self._shifts.find_open_shift(employee_id)
        if not shift:
            raise NotFoundError("No active shift found")

        breaks = shift.breaks
        if shift.status == ShiftStatus.ON_BREAK and shift.open_break is not None:
            breaks = breaks[:-1] + (replace(breaks[-1], end_time=now),)

        completed = apply_durations(
            replace(
                shift,
                status=ShiftStatus.COMPLETED,
                end_time=now,
                end_location=location,
                breaks=breaks,
            )
        )
        saved = self._shifts.save(completed)
        logger.info(
            "Employee %s completed shift %s (work=%.2f min, break=%.2f min)",
            employee_id,
            saved.shift_id,
            saved.total_work_duration,
            saved.total_break_duration,
        )

        return ShiftCompletion(shift=saved, notification=self._notify(saved))

    def get_current_shift(self, employee_id: int) -> Shift:
        shift = self._shifts.find_open_shift(employee_id)
        if not shift:
            raise NotFoundError("No active shift found")
        return shift

    def list_shifts(self, employee_id: int) -> Sequence[Shift]:
        return self._shifts.find_by_employee(employee_id)

    def list_all_shifts(self, *, current_role: Role) -> Sequence[AdminShiftRow]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Not authorized to access all shifts")
        return self._shifts.find_all()

    def get_statistics(self, employee_id: int, *, now: Optional[datetime] = None) -> ShiftStatistics:
        return summarize_shifts(self._shifts.find_by_employee(employee_id), today=now or now_utc())

    def resend_completion_notice(self, shift_id: Any, *, requester_id: int, current_role: Role) -> NotificationOutcome:
        """Manually re-send the completion notice of a finished shift."""
        if shift_id is None or str(shift_id).strip() == "":
            raise ValidationError("Please provide shift ID")
        try:
            shift_id = int(shift_id)
        except (TypeError, ValueError):
            raise ValidationError("Shift ID must be an integer") from None

        shift = self._shifts.get_by_id(shift_id)
        if not shift:
            raise NotFoundError("Shift not found")
        if current_role != Role.ADMIN and shift.employee_id != requester_id:
            raise AuthorizationError("Not authorized to send this notification")
        if shift.status != ShiftStatus.COMPLETED:
            raise ValidationError("Only completed shifts have a completion notice")

        return self._notify(shift)

    def _notify(self, shift: Shift) -> NotificationOutcome:
        # Best effort: a completed shift stays completed whatever happens here.
        if self._notifier is None:
            return NotificationOutcome(NotificationStatus.SKIPPED, "No notifier configured")
        try:
            delivered = self._notifier.notify_shift_completed(shift.employee_id, shift)
        except Exception as exc:
            logger.exception("Error triggering shift completion notification for shift %s", shift.shift_id)
            return NotificationOutcome(NotificationStatus.FAILED, str(exc))

        if not delivered:
            logger.warning("Shift completion notification for shift %s was not delivered", shift.shift_id)
            return NotificationOutcome(NotificationStatus.SKIPPED, "Notification not delivered")
        return NotificationOutcome(NotificationStatus.SENT)
