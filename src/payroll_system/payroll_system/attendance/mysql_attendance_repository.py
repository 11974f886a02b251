from __future__ import annotations

from datetime import date
from typing import Iterable

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def count_with_status(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        statuses: Iterable[AttendanceStatus],
    ) -> int:
        values = [AttendanceStatus(s).value for s in statuses]
        if not values:
            return 0
        placeholders = ",".join(["%s"] * len(values))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT COUNT(*) AS total
                FROM attendance_records
                WHERE user_id=%s AND work_date BETWEEN %s AND %s AND status IN ({placeholders})
                """,
                (int(user_id), start_date, end_date, *values),
            )
            return fetch_count(cur)
