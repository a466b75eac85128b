from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles carried by the authenticated principal."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class ShiftStatus(str, Enum):
    """Lifecycle state stored on each shift."""

    ACTIVE = "active"
    ON_BREAK = "on_break"
    COMPLETED = "completed"

    @property
    def is_open(self) -> bool:
        return self in OPEN_STATUSES


OPEN_STATUSES = frozenset({ShiftStatus.ACTIVE, ShiftStatus.ON_BREAK})


class BreakKind(str, Enum):
    """Allowed break categories. No effect on duration math."""

    LUNCH = "lunch"
    SHORT = "short"
    COFFEE = "coffee"
    DRINK = "drink"
    SMOKE = "smoke"
    PERSONAL = "personal"


class NotificationStatus(str, Enum):
    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"
