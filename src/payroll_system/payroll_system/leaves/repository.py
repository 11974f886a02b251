from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import LeaveRequest


class LeaveRepository(Protocol):
    def list_approved_overlapping(self, *, user_id: int, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        """APPROVED requests with any day inside ``[start_date, end_date]``."""

        raise NotImplementedError

    def count_approved_starting_between(self, *, user_id: int, start_date: date, end_date: date) -> int:
        raise NotImplementedError
