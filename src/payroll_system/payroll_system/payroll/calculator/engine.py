"""Shared payroll calculation engine.

Batch payroll generation, the month-end auto-payroll job and the salary
simulator all compute pay through these functions so the formula cannot
drift between them.

Everything here is pure: no I/O, no logging, no validation. Inputs are
expected to have passed ``SalaryStructure.build`` / ``AttendanceWindow.build``
(or an equivalent check) at the caller's edge; anything else propagates
through the arithmetic as-is.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Iterable, Mapping

from ...common.datetime_utils import is_weekend
from ...common.money import calculate_percentage, format_currency, round_half_up
from ...core.constants import LATE_CHECK_IN_THRESHOLD, PROF_TAX_MIN_PAYABLE_DAYS
from ..model import (
    REQUIRED_SALARY_FIELDS,
    SALARY_FIELD_ALIASES,
    PayrollBreakdown,
    SalaryStructure,
    SalaryValidation,
    get_default_salary_structure,
)

__all__ = [
    "calculate_gross_salary",
    "calculate_weekends",
    "calculate_approved_leave_days",
    "calculate_payable_days",
    "calculate_earned_gross",
    "calculate_earned_pf",
    "calculate_professional_tax",
    "calculate_total_deductions",
    "calculate_net_pay",
    "calculate_loss_of_pay",
    "calculate_complete_payroll",
    "get_default_salary_structure",
    "is_late_check_in",
    "count_working_days",
    "validate_salary_structure",
    "format_currency",
    "calculate_percentage",
]

_ONE_DAY = timedelta(days=1)


def _as_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def calculate_gross_salary(salary: SalaryStructure) -> float:
    """Full-month gross before deductions."""
    return (
        salary.basic
        + salary.hra
        + salary.std_allowance
        + (salary.fixed_allowance or 0)
        + (salary.performance_bonus or 0)
        + (salary.lta or 0)
    )


def calculate_weekends(year: int, month: int, days_in_month: int, joining_date: date | None, month_start_date: date) -> int:
    """Count Saturdays and Sundays payable to an employee in a month.

    ``month`` is zero-indexed. Counting starts at the later of the joining
    date and the month start, so mid-month joiners get no credit for
    weekends before they joined.
    """
    month_start = _as_date(month_start_date)
    effective_start = month_start
    if joining_date is not None and _as_date(joining_date) > month_start:
        effective_start = _as_date(joining_date)

    weekends = 0
    for day in range(effective_start.day, days_in_month + 1):
        if is_weekend(date(year, month + 1, day)):
            weekends += 1
    return weekends


def _leave_bounds(leave: Any) -> tuple[date, date]:
    if isinstance(leave, Mapping):
        start = leave.get("start_date", leave.get("startDate"))
        end = leave.get("end_date", leave.get("endDate"))
        return _as_date(start), _as_date(end)
    return _as_date(leave.start_date), _as_date(leave.end_date)


def _clip_days(start: date, end: date) -> int:
    return max(0, (end - start).days + 1)


def calculate_approved_leave_days(
    approved_leave_requests: Iterable[Any],
    month_start_date: date,
    month_end_date: date,
    *,
    merge_overlaps: bool = False,
) -> int:
    """Approved leave days falling inside ``[month_start_date, month_end_date]``.

    Each request is clipped to the month. By default requests are summed as-is,
    so two overlapping approved requests count the shared days twice; this is
    how historical payroll rows were produced. ``merge_overlaps=True`` unions
    the clipped ranges first.
    """
    month_start_date = _as_date(month_start_date)
    month_end_date = _as_date(month_end_date)
    clipped: list[tuple[date, date]] = []
    for leave in approved_leave_requests:
        start, end = _leave_bounds(leave)
        leave_start = start if start > month_start_date else month_start_date
        leave_end = end if end < month_end_date else month_end_date
        clipped.append((leave_start, leave_end))

    if not merge_overlaps:
        return sum(_clip_days(s, e) for s, e in clipped)

    merged: list[list[date]] = []
    for s, e in sorted(c for c in clipped if c[1] >= c[0]):
        if merged and s <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], e)
        else:
            merged.append([s, e])
    return sum(_clip_days(s, e) for s, e in merged)


def calculate_payable_days(attendance_count: int, weekends: int, approved_leave_days: int, days_in_month: int) -> int:
    """Days the employee is paid for, capped at the month length.

    Zero-attendance rule: no attendance and no approved leave means nothing
    is payable, weekends included.
    """
    if attendance_count == 0 and approved_leave_days == 0:
        return 0
    return min(attendance_count + weekends + approved_leave_days, days_in_month)


def calculate_earned_gross(gross_salary: float, payable_days: int, days_in_month: int) -> int:
    per_day_gross = gross_salary / days_in_month
    return round_half_up(per_day_gross * payable_days)


def calculate_earned_pf(pf_amount: float, payable_days: int, days_in_month: int) -> int:
    # Rounded on its own, never derived from earned gross.
    per_day_pf = pf_amount / days_in_month
    return round_half_up(per_day_pf * payable_days)


def calculate_professional_tax(payable_days: int, prof_tax_amount: float) -> float:
    """Flat tax, charged in full from 20 payable days and waived below."""
    return prof_tax_amount if payable_days >= PROF_TAX_MIN_PAYABLE_DAYS else 0


def calculate_total_deductions(earned_pf: float, earned_prof_tax: float, other_deductions: float = 0) -> float:
    return earned_pf + earned_prof_tax + other_deductions


def calculate_net_pay(earned_gross: float, total_deductions: float) -> float:
    return earned_gross - total_deductions


def calculate_loss_of_pay(gross_salary: float, pf_amount: float, prof_tax_amount: float, actual_net_pay: float) -> float:
    """Full-attendance net pay minus actual net pay.

    Always measured against the full PF and tax, even when the tax was waived.
    """
    full_month_net = gross_salary - pf_amount - prof_tax_amount
    return full_month_net - actual_net_pay


def calculate_complete_payroll(
    *,
    salary: SalaryStructure,
    attendance_count: int,
    weekends: int,
    approved_leave_days: int,
    days_in_month: int,
    other_deductions: float = 0,
) -> PayrollBreakdown:
    """Master calculation: one employee, one period."""
    gross_salary = calculate_gross_salary(salary)
    payable_days = calculate_payable_days(attendance_count, weekends, approved_leave_days, days_in_month)
    earned_gross = calculate_earned_gross(gross_salary, payable_days, days_in_month)

    earned_pf = calculate_earned_pf(salary.pf, payable_days, days_in_month)
    earned_prof_tax = calculate_professional_tax(payable_days, salary.prof_tax)
    total_deductions = calculate_total_deductions(earned_pf, earned_prof_tax, other_deductions)

    net_pay = calculate_net_pay(earned_gross, total_deductions)
    loss_of_pay = calculate_loss_of_pay(gross_salary, salary.pf, salary.prof_tax, net_pay)

    return PayrollBreakdown(
        days_in_month=days_in_month,
        attendance_days=attendance_count,
        weekend_days=weekends,
        leave_days=approved_leave_days,
        payable_days=payable_days,
        gross_salary=gross_salary,
        earned_gross=earned_gross,
        pf_deduction=earned_pf,
        prof_tax_deduction=earned_prof_tax,
        other_deductions=other_deductions,
        total_deductions=total_deductions,
        net_pay=net_pay,
        loss_of_pay=loss_of_pay,
        base_wage=salary.wage,
        total_earnings=earned_gross,
    )


def is_late_check_in(check_in_time: datetime) -> bool:
    """Late means strictly after 09:30:00 on the check-in's own day."""
    threshold = check_in_time.replace(
        hour=LATE_CHECK_IN_THRESHOLD.hour,
        minute=LATE_CHECK_IN_THRESHOLD.minute,
        second=0,
        microsecond=0,
    )
    return check_in_time > threshold


def count_working_days(start_date: date, end_date: date) -> int:
    """Monday-to-Friday days in ``[start_date, end_date]``, both inclusive."""
    working_days = 0
    current = start_date
    while current <= end_date:
        if not is_weekend(current):
            working_days += 1
        current += _ONE_DAY
    return working_days


def validate_salary_structure(salary: Any) -> SalaryValidation:
    """Report missing required fields as data; values are not range-checked.

    Accepts a ``SalaryStructure``, any object with the same attributes, or a
    mapping with snake_case or camelCase keys.
    """
    missing = []
    for name in REQUIRED_SALARY_FIELDS:
        alias = SALARY_FIELD_ALIASES[name]
        if isinstance(salary, Mapping):
            value = salary.get(name, salary.get(alias))
        else:
            value = getattr(salary, name, getattr(salary, alias, None))
        if value is None:
            missing.append(name)
    return SalaryValidation(valid=not missing, missing=missing)
