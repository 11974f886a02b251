from datetime import date

from src.payroll_system.payroll_system.core.enums import RequestStatus
from src.payroll_system.payroll_system.leaves.model import LeaveRequest
from src.payroll_system.payroll_system.payroll.calculator.engine import calculate_complete_payroll
from src.payroll_system.payroll_system.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.payroll_system.payroll_system.payroll.model import get_default_salary_structure


def test_standard_calculator_matches_engine():
    calc = StandardPayrollCalculator()
    salary = get_default_salary_structure()

    got = calc.calculate(salary=salary, attendance_count=18, weekends=8, approved_leave_days=0, days_in_month=28)
    assert got == calculate_complete_payroll(
        salary=salary, attendance_count=18, weekends=8, approved_leave_days=0, days_in_month=28
    )
    assert calc.weekends(year=2026, month=1, days_in_month=28, joining_date=date(2026, 2, 10), month_start=date(2026, 2, 1)) == 5


def test_standard_calculator_leave_merge_flag():
    leaves = [
        LeaveRequest(request_id=1, user_id=1, start_date=date(2026, 2, 2), end_date=date(2026, 2, 4), status=RequestStatus.APPROVED),
        LeaveRequest(request_id=2, user_id=1, start_date=date(2026, 2, 3), end_date=date(2026, 2, 5), status=RequestStatus.APPROVED),
    ]
    start, end = date(2026, 2, 1), date(2026, 2, 28)

    assert StandardPayrollCalculator().approved_leave_days(leaves, start=start, end=end) == 6
    assert StandardPayrollCalculator(merge_leave_overlaps=True).approved_leave_days(leaves, start=start, end=end) == 4
