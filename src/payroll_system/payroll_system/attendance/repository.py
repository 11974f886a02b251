from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol

from ..core.enums import AttendanceStatus


class AttendanceRepository(Protocol):
    def count_with_status(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        statuses: Iterable[AttendanceStatus],
    ) -> int:
        """Rows with ``work_date`` in ``[start_date, end_date]`` and one of ``statuses``."""

        raise NotImplementedError
