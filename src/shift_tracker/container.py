from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .database.connection import DatabaseConnection, DBConfig
from .notifications.email_notifier import EmailShiftNotifier, MailSettings
from .notifications.gateway import LogOnlyNotifier, NotificationGateway
from .shifts.memory_shift_repository import InMemoryShiftRepository
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftLifecycleService
from .users.memory_employee_repository import InMemoryEmployeeRepository
from .users.mysql_employee_repository import MySQLEmployeeRepository
from .users.repository import EmployeeRepository


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    shifts_repo: ShiftRepository
    notifier: NotificationGateway

    shift_service: ShiftLifecycleService

    conn: Optional[DatabaseConnection] = None


def build_notifier(settings: Any, employees: EmployeeRepository) -> NotificationGateway:
    if not bool(getattr(settings, "MAIL_ENABLED", False)):
        return LogOnlyNotifier()
    return EmailShiftNotifier(
        employees,
        MailSettings(
            server=str(settings.MAIL_SERVER),
            port=int(getattr(settings, "MAIL_PORT", 587)),
            use_tls=bool(getattr(settings, "MAIL_USE_TLS", True)),
            username=getattr(settings, "MAIL_USERNAME", None) or None,
            password=getattr(settings, "MAIL_PASSWORD", None) or None,
            from_email=str(getattr(settings, "MAIL_FROM", "shifttracker@example.com")),
            from_name=str(getattr(settings, "MAIL_FROM_NAME", "Shift Tracker")),
        ),
    )


def build_container(*, settings: Any) -> Container:
    """Wire repositories, notifier and services from a settings module."""

    store = str(getattr(settings, "SHIFT_STORE", "mysql")).lower()
    conn: Optional[DatabaseConnection] = None

    if store == "memory":
        employees_repo: EmployeeRepository = InMemoryEmployeeRepository()
        shifts_repo: ShiftRepository = InMemoryShiftRepository(employees_repo)
    elif store == "mysql":
        conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))
        employees_repo = MySQLEmployeeRepository(conn)
        shifts_repo = MySQLShiftRepository(conn)
    else:
        raise ValueError(f"Unknown SHIFT_STORE: {store!r}")

    notifier = build_notifier(settings, employees_repo)
    shift_service = ShiftLifecycleService(shifts_repo, notifier)

    return Container(
        employees_repo=employees_repo,
        shifts_repo=shifts_repo,
        notifier=notifier,
        shift_service=shift_service,
        conn=conn,
    )
