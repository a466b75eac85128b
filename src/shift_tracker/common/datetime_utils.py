from __future__ import annotations

from datetime import datetime, timezone

from ..core.constants import SECONDS_PER_MINUTE


def now_utc() -> datetime:
    """Current UTC time as a naive datetime (the storage convention).

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def minutes_between(start: datetime, end: datetime) -> float:
    """Signed, unrounded minutes from ``start`` to ``end``."""
    return (end - start).total_seconds() / SECONDS_PER_MINUTE


def isoformat_or_none(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
