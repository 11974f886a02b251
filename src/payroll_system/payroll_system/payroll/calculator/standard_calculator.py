from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..model import PayrollBreakdown, SalaryStructure
from .base import PayrollCalculator
from .engine import calculate_approved_leave_days, calculate_complete_payroll, calculate_weekends


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: pro-rated gross and PF over payable days, flat professional tax.

    ``merge_leave_overlaps`` switches leave counting from the historical
    summed behavior to an interval union; it changes generated numbers.
    """

    def __init__(self, *, merge_leave_overlaps: bool = False):
        self._merge_leave_overlaps = bool(merge_leave_overlaps)

    def weekends(self, *, year: int, month: int, days_in_month: int, joining_date: Optional[date], month_start: date) -> int:
        return calculate_weekends(year, month, days_in_month, joining_date, month_start)

    def approved_leave_days(self, leaves: Iterable, *, start: date, end: date) -> int:
        return calculate_approved_leave_days(leaves, start, end, merge_overlaps=self._merge_leave_overlaps)

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
        return calculate_complete_payroll(
            salary=salary,
            attendance_count=attendance_count,
            weekends=weekends,
            approved_leave_days=approved_leave_days,
            days_in_month=days_in_month,
            other_deductions=other_deductions,
        )
