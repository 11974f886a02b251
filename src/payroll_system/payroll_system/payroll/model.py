from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.validators import require_amount, require_day_count
from ..core.constants import (
    DEFAULT_BASIC_RATIO,
    DEFAULT_FIXED_ALLOWANCE_RATIO,
    DEFAULT_HRA_RATIO,
    DEFAULT_PF_RATIO_OF_BASIC,
    DEFAULT_PROFESSIONAL_TAX,
    DEFAULT_STD_ALLOWANCE_RATIO,
    DEFAULT_WAGE,
)
from ..core.enums import PayrollStatus
from ..core.exceptions import ValidationError

# snake_case field -> camelCase key used by JSON payloads and legacy rows
SALARY_FIELD_ALIASES = {
    "wage": "wage",
    "basic": "basic",
    "hra": "hra",
    "std_allowance": "stdAllowance",
    "fixed_allowance": "fixedAllowance",
    "performance_bonus": "performanceBonus",
    "lta": "lta",
    "pf": "pf",
    "prof_tax": "profTax",
}
REQUIRED_SALARY_FIELDS = ("wage", "basic", "hra", "std_allowance", "pf", "prof_tax")
OPTIONAL_SALARY_FIELDS = ("fixed_allowance", "performance_bonus", "lta")


@dataclass(frozen=True)
class SalaryStructure:
    """Per-employee compensation template (full-month amounts).

    The constructor does no checking so the calculator stays total; use
    ``build`` or ``from_mapping`` at the edge to reject bad values.
    """

    wage: float
    basic: float
    hra: float
    std_allowance: float
    pf: float
    prof_tax: float
    fixed_allowance: float = 0
    performance_bonus: float = 0
    lta: float = 0

    @property
    def net_salary(self) -> float:
        return self.wage - self.pf - self.prof_tax

    @classmethod
    def build(cls, **values: Any) -> "SalaryStructure":
        unknown = set(values) - set(SALARY_FIELD_ALIASES)
        if unknown:
            raise ValidationError(f"Unknown salary fields: {', '.join(sorted(unknown))}")

        missing = [name for name in REQUIRED_SALARY_FIELDS if values.get(name) is None]
        if missing:
            raise ValidationError(f"Salary structure is missing: {', '.join(missing)}")

        clean = {name: require_amount(values[name], name) for name in REQUIRED_SALARY_FIELDS}
        for name in OPTIONAL_SALARY_FIELDS:
            value = values.get(name)
            clean[name] = 0 if value is None else require_amount(value, name)
        return cls(**clean)

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "SalaryStructure":
        """Build from a DB row or JSON object (snake_case or camelCase keys)."""
        values = {}
        for name, alias in SALARY_FIELD_ALIASES.items():
            if name in row:
                values[name] = row[name]
            elif alias in row:
                values[name] = row[alias]
        return cls.build(**values)

    def to_dict(self) -> dict:
        return {alias: getattr(self, name) for name, alias in SALARY_FIELD_ALIASES.items()}


def get_default_salary_structure() -> SalaryStructure:
    """Company default: 50/30/10/10 split of the wage, PF at 12% of basic."""
    wage = DEFAULT_WAGE
    basic = wage * DEFAULT_BASIC_RATIO
    return SalaryStructure(
        wage=wage,
        basic=basic,
        hra=wage * DEFAULT_HRA_RATIO,
        std_allowance=wage * DEFAULT_STD_ALLOWANCE_RATIO,
        fixed_allowance=wage * DEFAULT_FIXED_ALLOWANCE_RATIO,
        performance_bonus=0,
        lta=0,
        pf=basic * DEFAULT_PF_RATIO_OF_BASIC,
        prof_tax=DEFAULT_PROFESSIONAL_TAX,
    )


def resolve_salary_structure(salary: Optional[SalaryStructure], *, use_default: bool) -> SalaryStructure:
    """Explicit decision point for employees without a salary structure."""
    if salary is not None:
        return salary
    if use_default:
        return get_default_salary_structure()
    raise ValidationError("Employee has no salary structure defined")


@dataclass(frozen=True)
class AttendanceWindow:
    """Day counts for one employee over one payroll period."""

    attendance_count: int
    weekends: int
    approved_leave_days: int
    days_in_month: int

    @classmethod
    def build(cls, *, attendance_count: Any, weekends: Any, approved_leave_days: Any, days_in_month: Any) -> "AttendanceWindow":
        days = require_day_count(days_in_month, "days_in_month")
        if not 1 <= days <= 31:
            raise ValidationError("days_in_month must be between 1 and 31")
        return cls(
            attendance_count=require_day_count(attendance_count, "attendance_count"),
            weekends=require_day_count(weekends, "weekends"),
            approved_leave_days=require_day_count(approved_leave_days, "approved_leave_days"),
            days_in_month=days,
        )


@dataclass(frozen=True)
class PayrollBreakdown:
    days_in_month: int
    attendance_days: int
    weekend_days: int
    leave_days: int
    payable_days: int

    gross_salary: float
    earned_gross: int

    pf_deduction: int
    prof_tax_deduction: float
    other_deductions: float
    total_deductions: float

    net_pay: float
    loss_of_pay: float

    # Legacy aliases kept by payslip/report consumers
    base_wage: float
    total_earnings: int

    def to_dict(self) -> dict:
        return {
            "daysInMonth": self.days_in_month,
            "attendanceDays": self.attendance_days,
            "weekendDays": self.weekend_days,
            "leaveDays": self.leave_days,
            "payableDays": self.payable_days,
            "grossSalary": self.gross_salary,
            "earnedGross": self.earned_gross,
            "pfDeduction": self.pf_deduction,
            "profTaxDeduction": self.prof_tax_deduction,
            "otherDeductions": self.other_deductions,
            "totalDeductions": self.total_deductions,
            "netPay": self.net_pay,
            "lossOfPay": self.loss_of_pay,
            "baseWage": self.base_wage,
            "totalEarnings": self.total_earnings,
        }


@dataclass(frozen=True)
class SalaryValidation:
    valid: bool
    missing: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RemainingDays:
    remaining_working_days: int
    remaining_weekends: int


@dataclass(frozen=True)
class PayrollRecord:
    """Persisted payroll row. ``month`` is zero-indexed."""

    payroll_id: int
    user_id: int
    month: int
    year: int
    base_wage: float
    total_earnings: float
    total_deductions: float
    net_pay: float
    payable_days: int
    days_in_month: int
    loss_of_pay: float
    status: PayrollStatus
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.payroll_id,
            "userId": self.user_id,
            "month": self.month,
            "year": self.year,
            "baseWage": self.base_wage,
            "totalEarnings": self.total_earnings,
            "totalDeductions": self.total_deductions,
            "netPay": self.net_pay,
            "payableDays": self.payable_days,
            "daysInMonth": self.days_in_month,
            "lossOfPay": self.loss_of_pay,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class SkippedEmployee:
    user_id: int
    employee_code: Optional[str]
    name: str
    reason: str


@dataclass(frozen=True)
class GeneratedPayroll:
    record: PayrollRecord
    breakdown: PayrollBreakdown
    employee_code: Optional[str]
    name: str


@dataclass(frozen=True)
class GenerationResult:
    month: int
    year: int
    payrolls: list[GeneratedPayroll]
    skipped: list[SkippedEmployee]

    @property
    def processed(self) -> int:
        return len(self.payrolls)


@dataclass(frozen=True)
class AutoPayrollResult:
    skipped: bool
    message: str
    month: int
    year: int
    generation: Optional[GenerationResult] = None
    existing_count: int = 0


@dataclass(frozen=True)
class SimulationStats:
    """Raw day counts of the in-progress month, for client display."""

    month_label: str
    today: date
    days_in_month: int
    present_days: int
    absent_days: int
    approved_leave_days: int
    weekends_so_far: int
    total_weekends: int
    working_days_so_far: int
    remaining_working_days: int
    remaining_weekends: int


@dataclass(frozen=True)
class ScenarioProjection:
    name: str
    estimated_payable_days: int
    projected_attendance: int
    breakdown: PayrollBreakdown


@dataclass(frozen=True)
class SimulationResult:
    salary: SalaryStructure
    used_default_salary: bool
    stats: SimulationStats
    optimistic: ScenarioProjection
    realistic: ScenarioProjection
    pessimistic: ScenarioProjection
    leave_balance: int
