from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..shifts.durations import format_duration
from ..shifts.model import Shift
from ..users.repository import EmployeeRepository
from .gateway import NotificationGateway

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
SUBJECT = "Shift Completed - Employee Shift Tracker"


@dataclass(frozen=True)
class MailSettings:
    server: str
    port: int = 587
    use_tls: bool = True
    username: Optional[str] = None
    password: Optional[str] = None
    from_email: str = "shifttracker@example.com"
    from_name: str = "Shift Tracker"
    timeout: float = 10.0


def _fmt_time(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M UTC") if value else "-"


class EmailShiftNotifier(NotificationGateway):
    """Send the shift-completion e-mail over SMTP."""

    def __init__(self, employees: EmployeeRepository, settings: MailSettings):
        self._employees = employees
        self._settings = settings
        self._templates = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(["html"]),
        )

    def render(self, *, employee_name: str, shift: Shift) -> str:
        template = self._templates.get_template("shift_completed.html")
        return template.render(
            employee_name=employee_name,
            start_time=_fmt_time(shift.start_time),
            end_time=_fmt_time(shift.end_time),
            work_duration=format_duration(shift.total_work_duration),
            break_duration=format_duration(shift.total_break_duration),
            break_count=len(shift.breaks),
            app_name=self._settings.from_name,
        )

    def notify_shift_completed(self, employee_id: int, shift: Shift) -> bool:
        employee = self._employees.get_by_id(employee_id)
        if not employee or not employee.email:
            logger.warning("Employee %s not found or has no email; skipping notification", employee_id)
            return False

        msg = MIMEMultipart("alternative")
        msg["Subject"] = SUBJECT
        msg["From"] = f"{self._settings.from_name} <{self._settings.from_email}>"
        msg["To"] = employee.email
        msg.attach(
            MIMEText(
                f"Shift completed. Worked {format_duration(shift.total_work_duration)}, "
                f"breaks {format_duration(shift.total_break_duration)}.",
                "plain",
            )
        )
        msg.attach(MIMEText(self.render(employee_name=employee.full_name, shift=shift), "html"))

        with smtplib.SMTP(self._settings.server, self._settings.port, timeout=self._settings.timeout) as server:
            if self._settings.use_tls:
                server.starttls()
            if self._settings.username:
                server.login(self._settings.username, self._settings.password or "")
            server.send_message(msg)

        logger.info("Shift completion email sent to %s", employee.email)
        return True
