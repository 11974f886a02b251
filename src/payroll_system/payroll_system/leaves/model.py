from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    start_date: date
    end_date: date
    status: RequestStatus
    reason: Optional[str] = None
