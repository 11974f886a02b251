from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import is_last_day_of_month, month_bounds, month_label
from ..common.money import format_currency
from ..common.validators import require_month, require_positive_int, require_year
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import ATTENDED_STATUSES
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import (
    AttendanceWindow,
    AutoPayrollResult,
    GeneratedPayroll,
    GenerationResult,
    PayrollRecord,
    SkippedEmployee,
    resolve_salary_structure,
)
from .repository import PayrollRepository, SalaryRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


def _joined_after(employee: Employee, *, month: int, year: int) -> bool:
    joining = employee.joining_date
    if joining is None:
        return False
    return year < joining.year or (year == joining.year and month < joining.month - 1)


class PayrollService:
    """Batch payroll generation, the month-end job, history and reports.

    Every amount goes through the injected calculator; nothing here re-derives
    the pay formula.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        salaries: SalaryRepository,
        payrolls: PayrollRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        use_default_salary: bool = True,
    ):
        self._employees = employees
        self._attendance = attendance
        self._leaves = leaves
        self._salaries = salaries
        self._payrolls = payrolls
        self._calculator = calculator or StandardPayrollCalculator()
        self._use_default_salary = bool(use_default_salary)

    def generate_monthly_payroll(self, *, month: int, year: int, today: date, active_only: bool = False) -> GenerationResult:
        month = require_month(month)
        year = require_year(year)
        if (year, month) > (today.year, today.month - 1):
            raise ValidationError("Cannot process payroll for future months")

        start, end = month_bounds(year, month)

        payrolls: list[GeneratedPayroll] = []
        skipped: list[SkippedEmployee] = []

        for emp in self._employees.list_employees(active_only=active_only):
            if _joined_after(emp, month=month, year=year):
                skipped.append(
                    SkippedEmployee(
                        user_id=emp.user_id,
                        employee_code=emp.employee_code,
                        name=emp.full_name,
                        reason=f"Not joined yet (Joining: {emp.joining_date.strftime('%b %Y')})",
                    )
                )
                continue

            try:
                stored = self._salaries.get_for_user(emp.user_id)
                salary = resolve_salary_structure(stored, use_default=self._use_default_salary)
                window = self._attendance_window(emp, start=start, end=end, year=year, month=month)
            except ValidationError as exc:
                logger.warning("Skipping user_id=%s for %s: %s", emp.user_id, month_label(year, month), exc)
                skipped.append(
                    SkippedEmployee(user_id=emp.user_id, employee_code=emp.employee_code, name=emp.full_name, reason=str(exc))
                )
                continue
            if stored is None:
                logger.info("user_id=%s has no salary structure; using company default", emp.user_id)

            breakdown = self._calculator.calculate(
                salary=salary,
                attendance_count=window.attendance_count,
                weekends=window.weekends,
                approved_leave_days=window.approved_leave_days,
                days_in_month=window.days_in_month,
            )

            record = self._payrolls.replace_for_period(user_id=emp.user_id, month=month, year=year, breakdown=breakdown)
            payrolls.append(
                GeneratedPayroll(record=record, breakdown=breakdown, employee_code=emp.employee_code, name=emp.full_name)
            )

        logger.info(
            "Processed payroll for %s: generated=%d skipped=%d",
            month_label(year, month),
            len(payrolls),
            len(skipped),
        )
        return GenerationResult(month=month, year=year, payrolls=payrolls, skipped=skipped)

    def _attendance_window(self, emp: Employee, *, start: date, end: date, year: int, month: int) -> AttendanceWindow:
        attendance_count = self._attendance.count_with_status(
            user_id=emp.user_id,
            start_date=start,
            end_date=end,
            statuses=ATTENDED_STATUSES,
        )
        weekends = self._calculator.weekends(
            year=year,
            month=month,
            days_in_month=end.day,
            joining_date=emp.joining_date,
            month_start=start,
        )
        leaves = self._leaves.list_approved_overlapping(user_id=emp.user_id, start_date=start, end_date=end)
        return AttendanceWindow.build(
            attendance_count=attendance_count,
            weekends=weekends,
            approved_leave_days=self._calculator.approved_leave_days(leaves, start=start, end=end),
            days_in_month=end.day,
        )

    def run_auto_payroll(self, *, today: date) -> AutoPayrollResult:
        """Month-end job: generate once, on the last day of the month."""
        month, year = today.month - 1, today.year

        if not is_last_day_of_month(today):
            return AutoPayrollResult(skipped=True, message="Not the last day of month", month=month, year=year)

        existing = self._payrolls.count_for_period(month=month, year=year)
        if existing > 0:
            logger.info("Payroll already generated for %s (%d rows)", month_label(year, month), existing)
            return AutoPayrollResult(
                skipped=True,
                message="Payroll already generated for this month",
                month=month,
                year=year,
                existing_count=existing,
            )

        logger.info("Auto payroll: running for %s", month_label(year, month))
        generation = self.generate_monthly_payroll(month=month, year=year, today=today, active_only=True)
        return AutoPayrollResult(
            skipped=False,
            message="Monthly payroll auto-generated successfully",
            month=month,
            year=year,
            generation=generation,
        )

    def clean_pre_joining_payrolls(self) -> dict[int, int]:
        """Remove rows generated for months before an employee joined.

        Returns deleted row counts keyed by user_id (only users with deletions).
        """
        deleted: dict[int, int] = {}
        for emp in self._employees.list_employees():
            if emp.joining_date is None:
                continue
            count = self._payrolls.delete_before_period(
                user_id=emp.user_id,
                month=emp.joining_date.month - 1,
                year=emp.joining_date.year,
            )
            if count:
                deleted[emp.user_id] = count
                logger.info("Cleaned %d pre-joining payroll rows for user_id=%s", count, emp.user_id)
        return deleted

    def reset_payrolls(self) -> int:
        count = self._payrolls.delete_all()
        logger.warning("Deleted all %d payroll rows", count)
        return count

    def get_history(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[PayrollRecord]:
        limit = require_positive_int(limit, "limit")
        return list(self._payrolls.list_for_user(user_id=int(user_id), limit=limit))

    def get_payslip(self, user_id: int, *, month: int, year: int) -> PayrollRecord:
        month = require_month(month)
        year = require_year(year)
        record = self._payrolls.get_for_user_period(user_id=int(user_id), month=month, year=year)
        if not record:
            raise ValidationError(f"No payroll generated for {month_label(year, month)}")
        return record

    def build_report(self, *, month: int, year: int) -> ReportData:
        month = require_month(month)
        year = require_year(year)
        query_rows = self._payrolls.list_report_rows(month=month, year=year)

        out_rows: list[dict] = []
        total_earnings = 0.0
        total_deductions = 0.0
        total_net = 0.0
        total_lop = 0.0

        for r in query_rows:
            out_rows.append(
                {
                    "employee_code": r.get("employee_code") or "-",
                    "full_name": r["full_name"],
                    "payable_days": f"{int(r['payable_days'])}/{int(r['days_in_month'])}",
                    "base_wage": format_currency(float(r["base_wage"])),
                    "earnings": format_currency(float(r["total_earnings"])),
                    "deductions": format_currency(float(r["total_deductions"])),
                    "net_pay": format_currency(float(r["net_pay"])),
                    "loss_of_pay": format_currency(float(r["loss_of_pay"])),
                    "status": str(r["status"]),
                }
            )
            total_earnings += float(r["total_earnings"])
            total_deductions += float(r["total_deductions"])
            total_net += float(r["net_pay"])
            total_lop += float(r["loss_of_pay"])

        summary = {
            "period": month_label(year, month),
            "employees": len(out_rows),
            "total_earnings": format_currency(total_earnings),
            "total_deductions": format_currency(total_deductions),
            "total_net_pay": format_currency(total_net),
            "total_loss_of_pay": format_currency(total_lop),
        }
        return ReportData(rows=out_rows, summary=summary)
