"""Example: use the service layer directly (no Flask).

Controllers are thin; payroll rules live in the calculator and services.

    APP_ENV=development python examples/example_usage.py
"""

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.payroll_system.payroll_system.common.datetime_utils import now_local
from src.payroll_system.payroll_system.common.money import format_currency
from src.payroll_system.payroll_system.container import build_container
from src.payroll_system.payroll_system.payroll.calculator.engine import (
    calculate_complete_payroll,
    get_default_salary_structure,
)


def main():
    # Pure calculation: February 2026, 18 days attended, 8 weekend days.
    breakdown = calculate_complete_payroll(
        salary=get_default_salary_structure(),
        attendance_count=18,
        weekends=8,
        approved_leave_days=0,
        days_in_month=28,
    )
    print(f"payable={breakdown.payable_days}/28 net={format_currency(breakdown.net_pay)}")

    # Same engine behind the services, backed by MySQL.
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    result = container.simulator_service.simulate(1, today=now_local().date())
    for scenario in (result.pessimistic, result.realistic, result.optimistic):
        print(scenario.name, scenario.estimated_payable_days, format_currency(scenario.breakdown.net_pay))


if __name__ == "__main__":
    main()
