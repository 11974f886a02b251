"""Future-attendance projections for the salary simulator.

All three variants estimate the final payable days of an in-progress month
from what has happened so far. They only estimate days; the simulator still
prices each scenario through ``calculate_complete_payroll``.
"""

from __future__ import annotations

from datetime import date

from ...common.datetime_utils import is_weekend
from ...common.money import round_half_up
from ..model import RemainingDays


def calculate_remaining_days(year: int, month: int, current_day: int, days_in_month: int) -> RemainingDays:
    """Split the days after ``current_day`` into working days and weekends."""
    remaining_weekends = 0
    remaining_working_days = 0
    for day in range(current_day + 1, days_in_month + 1):
        if is_weekend(date(year, month + 1, day)):
            remaining_weekends += 1
        else:
            remaining_working_days += 1
    return RemainingDays(remaining_working_days=remaining_working_days, remaining_weekends=remaining_weekends)


def calculate_optimistic_payable_days(
    attendance_count: int,
    approved_leave_days: int,
    remaining_working_days: int,
    total_weekends_in_month: int,
) -> int:
    """Every remaining working day attended."""
    if attendance_count == 0 and approved_leave_days == 0:
        # Nothing earned yet: only the future counts.
        return remaining_working_days + total_weekends_in_month
    return attendance_count + approved_leave_days + remaining_working_days + total_weekends_in_month


def calculate_realistic_payable_days(
    attendance_count: int,
    approved_leave_days: int,
    total_working_days_so_far: int,
    remaining_working_days: int,
    total_weekends_in_month: int,
) -> int:
    """Remaining working days attended at the month-to-date attendance rate."""
    if total_working_days_so_far == 0:
        return calculate_optimistic_payable_days(
            attendance_count,
            approved_leave_days,
            remaining_working_days,
            total_weekends_in_month,
        )

    projected_future_attendance = project_future_attendance(
        attendance_count, total_working_days_so_far, remaining_working_days
    )

    if attendance_count == 0 and approved_leave_days == 0:
        return projected_future_attendance + total_weekends_in_month
    return attendance_count + approved_leave_days + projected_future_attendance + total_weekends_in_month


def calculate_pessimistic_payable_days(attendance_count: int, approved_leave_days: int, weekends_so_far: int) -> int:
    """No future attendance and no credit for weekends still to come."""
    return attendance_count + approved_leave_days + weekends_so_far


def project_future_attendance(attendance_count: int, total_working_days_so_far: int, remaining_working_days: int) -> int:
    """Future present days implied by the realistic projection.

    Never more than the remaining working days, even when weekend attendance
    pushes the month-to-date rate above one.
    """
    if total_working_days_so_far == 0:
        return remaining_working_days
    projected = round_half_up(remaining_working_days * (attendance_count / total_working_days_so_far))
    return min(remaining_working_days, projected)
