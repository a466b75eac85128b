from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from ..core.enums import NotificationStatus
from ..shifts.model import Shift

logger = logging.getLogger(__name__)


class NotificationGateway(Protocol):
    def notify_shift_completed(self, employee_id: int, shift: Shift) -> bool:
        """Deliver a completion notice; True when it went out."""
        raise NotImplementedError


@dataclass(frozen=True)
class NotificationOutcome:
    """Result of a best-effort notification, kept apart from the shift itself."""

    status: NotificationStatus
    detail: Optional[str] = None

    @property
    def delivered(self) -> bool:
        return self.status == NotificationStatus.SENT


class LogOnlyNotifier(NotificationGateway):
    """Used when mail delivery is disabled."""

    def notify_shift_completed(self, employee_id: int, shift: Shift) -> bool:
        logger.info(
            "Mail disabled; shift %s of employee %s completed (work=%.1f min, break=%.1f min)",
            shift.shift_id,
            employee_id,
            shift.total_work_duration,
            shift.total_break_duration,
        )
        return True
