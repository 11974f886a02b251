from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee as seen by payroll.

    Note: Pure data object (no DB access code).
    """

    user_id: int
    employee_code: Optional[str]
    full_name: str
    role: Role
    joining_date: Optional[date]
    is_active: bool = True
