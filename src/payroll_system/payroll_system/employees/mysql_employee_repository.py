from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_SELECT = """
    SELECT u.user_id, u.employee_code, u.full_name, u.role, u.is_active, d.joining_date
    FROM users u
    LEFT JOIN employee_details d ON d.user_id = u.user_id
"""


def _to_employee(row: dict) -> Employee:
    return Employee(
        user_id=int(row["user_id"]),
        employee_code=row.get("employee_code"),
        full_name=row["full_name"],
        role=Role(row["role"]),
        joining_date=row.get("joining_date"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE u.user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_employees(self, *, active_only: bool = False) -> Sequence[Employee]:
        sql = _SELECT + " WHERE u.role=%s"
        params: list = [Role.EMPLOYEE.value]
        if active_only:
            sql += " AND u.is_active=1"
        sql += " ORDER BY u.user_id"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_employee(r) for r in fetchall(cur)]
