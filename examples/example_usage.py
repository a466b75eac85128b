"""Example: drive a shift through the service layer (no Flask).

Uses the in-memory store, so it runs without a database.
"""

from datetime import timedelta
from types import SimpleNamespace

from shift_tracker.common.datetime_utils import now_utc
from shift_tracker.container import build_container
from shift_tracker.shifts.durations import format_duration


def main():
    container = build_container(settings=SimpleNamespace(SHIFT_STORE="memory", MAIL_ENABLED=False))
    service = container.shift_service

    t0 = now_utc()
    service.start_shift(1, longitude=-122.4, latitude=37.8, now=t0)
    service.start_break(1, "lunch", longitude=-122.4, latitude=37.8, now=t0 + timedelta(minutes=30))
    service.end_break(1, longitude=-122.41, latitude=37.79, now=t0 + timedelta(minutes=45))
    done = service.end_shift(1, longitude=-122.4, latitude=37.8, now=t0 + timedelta(minutes=480))

    print(
        done.shift.status.value,
        "worked", format_duration(done.shift.total_work_duration),
        "break", format_duration(done.shift.total_break_duration),
        "notification", done.notification.status.value,
    )


if __name__ == "__main__":
    main()
