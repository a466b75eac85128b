from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee, as owned by the identity subsystem.

    Note: Read-only here; shifts only reference ``employee_id``.
    """

    employee_id: int
    full_name: str
    email: Optional[str]
    role: Role = Role.EMPLOYEE
