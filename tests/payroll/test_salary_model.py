from __future__ import annotations

import pytest

from src.payroll_system.payroll_system.core.exceptions import ValidationError
from src.payroll_system.payroll_system.payroll.model import (
    AttendanceWindow,
    SalaryStructure,
    get_default_salary_structure,
    resolve_salary_structure,
)


def _values(**overrides):
    values = dict(wage=40000, basic=20000, hra=12000, std_allowance=4000, pf=2400, prof_tax=200)
    values.update(overrides)
    return values


def test_build_fills_optional_components_with_zero():
    s = SalaryStructure.build(**_values())
    assert (s.fixed_allowance, s.performance_bonus, s.lta) == (0, 0, 0)


@pytest.mark.parametrize(
    "overrides",
    [
        {"pf": None},
        {"basic": -1},
        {"hra": "12000"},
        {"wage": float("nan")},
        {"std_allowance": True},
        {"bonus": 10},
    ],
)
def test_build_rejects_invalid_values(overrides):
    with pytest.raises(ValidationError):
        SalaryStructure.build(**_values(**overrides))


def test_from_mapping_accepts_camel_case_keys():
    row = {"wage": 40000, "basic": 20000, "hra": 12000, "stdAllowance": 4000, "pf": 2400, "profTax": 200, "lta": 1000}
    s = SalaryStructure.from_mapping(row)
    assert s.std_allowance == 4000
    assert s.prof_tax == 200
    assert s.lta == 1000
    assert s.to_dict()["stdAllowance"] == 4000


def test_from_mapping_reports_missing_fields():
    with pytest.raises(ValidationError, match="prof_tax"):
        SalaryStructure.from_mapping({"wage": 1, "basic": 1, "hra": 1, "std_allowance": 1, "pf": 1})


def test_resolve_salary_structure():
    stored = SalaryStructure.build(**_values())
    assert resolve_salary_structure(stored, use_default=False) is stored
    assert resolve_salary_structure(None, use_default=True) == get_default_salary_structure()
    with pytest.raises(ValidationError):
        resolve_salary_structure(None, use_default=False)


def test_attendance_window_validation():
    w = AttendanceWindow.build(attendance_count=18, weekends=8, approved_leave_days=0, days_in_month=28)
    assert w.days_in_month == 28

    with pytest.raises(ValidationError):
        AttendanceWindow.build(attendance_count=18, weekends=8, approved_leave_days=0, days_in_month=0)
    with pytest.raises(ValidationError):
        AttendanceWindow.build(attendance_count=-1, weekends=8, approved_leave_days=0, days_in_month=28)
    with pytest.raises(ValidationError):
        AttendanceWindow.build(attendance_count=1.5, weekends=8, approved_leave_days=0, days_in_month=28)
