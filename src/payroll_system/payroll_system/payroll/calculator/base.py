from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, Optional

from ..model import PayrollBreakdown, SalaryStructure


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def weekends(self, *, year: int, month: int, days_in_month: int, joining_date: Optional[date], month_start: date) -> int:
        raise NotImplementedError

    @abstractmethod
    def approved_leave_days(self, leaves: Iterable, *, start: date, end: date) -> int:
        raise NotImplementedError

    @abstractmethod
    def calculate(
        self,
        *,
        salary: SalaryStructure,
        attendance_count: int,
        weekends: int,
        approved_leave_days: int,
        days_in_month: int,
        other_deductions: float = 0,
    ) -> PayrollBreakdown:
        raise NotImplementedError
