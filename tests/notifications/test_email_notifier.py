from __future__ import annotations

from datetime import datetime

from shift_tracker.core.enums import ShiftStatus
from shift_tracker.notifications import email_notifier
from shift_tracker.notifications.email_notifier import EmailShiftNotifier, MailSettings
from shift_tracker.shifts.model import GeoPoint, Shift
from shift_tracker.users.memory_employee_repository import InMemoryEmployeeRepository
from shift_tracker.users.model import Employee

HERE = GeoPoint(longitude=-122.4, latitude=37.8)


class FakeSMTP:
    instances: list["FakeSMTP"] = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.started_tls = False
        self.logged_in = None
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.started_tls = True

    def login(self, username, password):
        self.logged_in = (username, password)

    def send_message(self, msg):
        self.sent.append(msg)


def _completed_shift() -> Shift:
    return Shift(
        shift_id=5,
        employee_id=1,
        status=ShiftStatus.COMPLETED,
        start_time=datetime(2026, 2, 2, 8, 0),
        start_location=HERE,
        created_at=datetime(2026, 2, 2, 8, 0),
        end_time=datetime(2026, 2, 2, 16, 0),
        end_location=HERE,
        total_work_duration=465,
        total_break_duration=15,
    )


def _notifier(employees):
    settings = MailSettings(server="smtp.test", port=2525, username="bot", password="pw", from_email="bot@test")
    return EmailShiftNotifier(employees, settings)


def test_sends_completion_email(monkeypatch):
    FakeSMTP.instances.clear()
    monkeypatch.setattr(email_notifier.smtplib, "SMTP", FakeSMTP)
    employees = InMemoryEmployeeRepository([Employee(employee_id=1, full_name="Ana", email="ana@example.com")])

    assert _notifier(employees).notify_shift_completed(1, _completed_shift()) is True

    smtp = FakeSMTP.instances[-1]
    assert (smtp.host, smtp.port) == ("smtp.test", 2525)
    assert smtp.started_tls
    assert smtp.logged_in == ("bot", "pw")
    msg = smtp.sent[0]
    assert msg["To"] == "ana@example.com"
    assert msg["Subject"] == email_notifier.SUBJECT


def test_missing_employee_email_returns_false(monkeypatch):
    FakeSMTP.instances.clear()
    monkeypatch.setattr(email_notifier.smtplib, "SMTP", FakeSMTP)
    employees = InMemoryEmployeeRepository([Employee(employee_id=1, full_name="Ana", email=None)])

    assert _notifier(employees).notify_shift_completed(1, _completed_shift()) is False
    assert _notifier(employees).notify_shift_completed(2, _completed_shift()) is False
    assert FakeSMTP.instances == []


def test_rendered_body_has_formatted_durations():
    html = _notifier(InMemoryEmployeeRepository()).render(employee_name="Ana", shift=_completed_shift())
    assert "Hello Ana" in html
    assert "7h 45m" in html
    assert "0h 15m" in html
    assert "2026-02-02 08:00 UTC" in html
