from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import days_in_month as month_length
from ..common.datetime_utils import month_label
from ..core.constants import ANNUAL_LEAVE_QUOTA
from ..core.enums import ATTENDED_STATUSES, AttendanceStatus
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRepository
from .calculator.base import PayrollCalculator
from .calculator.engine import count_working_days
from .calculator.projections import (
    calculate_optimistic_payable_days,
    calculate_pessimistic_payable_days,
    calculate_realistic_payable_days,
    calculate_remaining_days,
    project_future_attendance,
)
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import AttendanceWindow, ScenarioProjection, SimulationResult, SimulationStats, resolve_salary_structure
from .repository import SalaryRepository

logger = logging.getLogger(__name__)


class SalarySimulatorService:
    """Projects the current month's pay under three attendance scenarios.

    Uses the same calculator as batch generation so a simulated month and a
    generated payslip for identical day counts always agree.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        salaries: SalaryRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        use_default_salary: bool = True,
    ):
        self._employees = employees
        self._attendance = attendance
        self._leaves = leaves
        self._salaries = salaries
        self._calculator = calculator or StandardPayrollCalculator()
        self._use_default_salary = bool(use_default_salary)

    def simulate(self, user_id: int, *, today: date) -> SimulationResult:
        employee = self._employees.get_by_id(int(user_id))
        if not employee:
            raise ValidationError("Employee not found")

        stored = self._salaries.get_for_user(employee.user_id)
        salary = resolve_salary_structure(stored, use_default=self._use_default_salary)

        year, month = today.year, today.month - 1
        days_in_month = month_length(year, month)
        month_start = today.replace(day=1)

        present_days = self._attendance.count_with_status(
            user_id=employee.user_id,
            start_date=month_start,
            end_date=today,
            statuses=ATTENDED_STATUSES,
        )
        absent_days = self._attendance.count_with_status(
            user_id=employee.user_id,
            start_date=month_start,
            end_date=today,
            statuses=(AttendanceStatus.ABSENT,),
        )
        leaves = self._leaves.list_approved_overlapping(user_id=employee.user_id, start_date=month_start, end_date=today)
        leave_days = self._calculator.approved_leave_days(leaves, start=month_start, end=today)

        total_weekends = self._calculator.weekends(
            year=year,
            month=month,
            days_in_month=days_in_month,
            joining_date=employee.joining_date,
            month_start=month_start,
        )
        # Weekends already elapsed: walk only up to today.
        weekends_so_far = self._calculator.weekends(
            year=year,
            month=month,
            days_in_month=today.day,
            joining_date=employee.joining_date,
            month_start=month_start,
        )
        working_days_so_far = count_working_days(max(month_start, employee.joining_date or month_start), today)
        remaining = calculate_remaining_days(year, month, today.day, days_in_month)

        future_realistic = project_future_attendance(present_days, working_days_so_far, remaining.remaining_working_days)

        optimistic = self._scenario(
            "optimistic",
            salary=salary,
            estimated=calculate_optimistic_payable_days(
                present_days, leave_days, remaining.remaining_working_days, total_weekends
            ),
            attendance=present_days + remaining.remaining_working_days,
            weekends=total_weekends,
            leave_days=leave_days,
            days_in_month=days_in_month,
        )
        realistic = self._scenario(
            "realistic",
            salary=salary,
            estimated=calculate_realistic_payable_days(
                present_days, leave_days, working_days_so_far, remaining.remaining_working_days, total_weekends
            ),
            attendance=present_days + future_realistic,
            weekends=total_weekends,
            leave_days=leave_days,
            days_in_month=days_in_month,
        )
        pessimistic = self._scenario(
            "pessimistic",
            salary=salary,
            estimated=calculate_pessimistic_payable_days(present_days, leave_days, weekends_so_far),
            attendance=present_days,
            weekends=weekends_so_far,
            leave_days=leave_days,
            days_in_month=days_in_month,
        )

        year_start, year_end = date(year, 1, 1), date(year, 12, 31)
        approved_this_year = self._leaves.count_approved_starting_between(
            user_id=employee.user_id, start_date=year_start, end_date=year_end
        )

        stats = SimulationStats(
            month_label=month_label(year, month),
            today=today,
            days_in_month=days_in_month,
            present_days=present_days,
            absent_days=absent_days,
            approved_leave_days=leave_days,
            weekends_so_far=weekends_so_far,
            total_weekends=total_weekends,
            working_days_so_far=working_days_so_far,
            remaining_working_days=remaining.remaining_working_days,
            remaining_weekends=remaining.remaining_weekends,
        )
        logger.debug("Simulated %s for user_id=%s", stats.month_label, employee.user_id)
        return SimulationResult(
            salary=salary,
            used_default_salary=stored is None,
            stats=stats,
            optimistic=optimistic,
            realistic=realistic,
            pessimistic=pessimistic,
            leave_balance=max(0, ANNUAL_LEAVE_QUOTA - approved_this_year),
        )

    def _scenario(self, name: str, *, salary, estimated: int, attendance: int, weekends: int, leave_days: int, days_in_month: int) -> ScenarioProjection:
        window = AttendanceWindow.build(
            attendance_count=attendance,
            weekends=weekends,
            approved_leave_days=leave_days,
            days_in_month=days_in_month,
        )
        breakdown = self._calculator.calculate(
            salary=salary,
            attendance_count=window.attendance_count,
            weekends=window.weekends,
            approved_leave_days=window.approved_leave_days,
            days_in_month=window.days_in_month,
        )
        return ScenarioProjection(
            name=name,
            estimated_payable_days=estimated,
            projected_attendance=attendance,
            breakdown=breakdown,
        )
