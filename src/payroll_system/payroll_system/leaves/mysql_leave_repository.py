from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall
from .model import LeaveRequest
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_approved_overlapping(self, *, user_id: int, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, user_id, start_date, end_date, status, reason
                FROM leave_requests
                WHERE user_id=%s AND status=%s AND start_date<=%s AND end_date>=%s
                ORDER BY start_date
                """,
                (int(user_id), RequestStatus.APPROVED.value, end_date, start_date),
            )
            return [
                LeaveRequest(
                    request_id=int(r["request_id"]),
                    user_id=int(r["user_id"]),
                    start_date=r["start_date"],
                    end_date=r["end_date"],
                    status=RequestStatus(r["status"]),
                    reason=r.get("reason"),
                )
                for r in fetchall(cur)
            ]

    def count_approved_starting_between(self, *, user_id: int, start_date: date, end_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS total
                FROM leave_requests
                WHERE user_id=%s AND status=%s AND start_date BETWEEN %s AND %s
                """,
                (int(user_id), RequestStatus.APPROVED.value, start_date, end_date),
            )
            return fetch_count(cur)
