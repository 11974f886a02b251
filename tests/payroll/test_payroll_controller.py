from __future__ import annotations

import importlib
import io
from types import SimpleNamespace

import pandas as pd
import pytest
from flask import Flask

from src.payroll_system.payroll_system.core.enums import PayrollStatus, Role
from src.payroll_system.payroll_system.core.exceptions import ValidationError
from src.payroll_system.payroll_system.main import create_app
from src.payroll_system.payroll_system.payroll.calculator.engine import calculate_complete_payroll
from src.payroll_system.payroll_system.payroll.controller import register
from src.payroll_system.payroll_system.payroll.model import (
    AutoPayrollResult,
    GeneratedPayroll,
    GenerationResult,
    PayrollRecord,
    SkippedEmployee,
    get_default_salary_structure,
)
from src.payroll_system.payroll_system.payroll.service import ReportData


def _breakdown():
    return calculate_complete_payroll(
        salary=get_default_salary_structure(), attendance_count=18, weekends=8, approved_leave_days=0, days_in_month=28
    )


def _record(month=1, year=2026):
    b = _breakdown()
    return PayrollRecord(
        payroll_id=1,
        user_id=5,
        month=month,
        year=year,
        base_wage=b.base_wage,
        total_earnings=b.total_earnings,
        total_deductions=b.total_deductions,
        net_pay=b.net_pay,
        payable_days=b.payable_days,
        days_in_month=b.days_in_month,
        loss_of_pay=b.loss_of_pay,
        status=PayrollStatus.GENERATED,
    )


class FakePayrollService:
    def __init__(self):
        self.calls = []

    def generate_monthly_payroll(self, *, month, year, today):
        self.calls.append(("generate", month, year))
        if int(month) > 11:
            raise ValidationError("month must be an integer between 0 and 11")
        return GenerationResult(
            month=int(month),
            year=int(year),
            payrolls=[GeneratedPayroll(record=_record(), breakdown=_breakdown(), employee_code="EMP005", name="Ravi")],
            skipped=[SkippedEmployee(user_id=6, employee_code="EMP006", name="Mina", reason="Not joined yet (Joining: Mar 2026)")],
        )

    def run_auto_payroll(self, *, today):
        self.calls.append(("auto", today))
        return AutoPayrollResult(skipped=True, message="Not the last day of month", month=today.month - 1, year=today.year)

    def get_history(self, user_id, *, limit):
        self.calls.append(("history", user_id, limit))
        return [_record()]

    def get_payslip(self, user_id, *, month, year):
        if str(month) != "1":
            raise ValidationError("No payroll generated for March 2026")
        return _record()

    def build_report(self, *, month, year):
        return ReportData(
            rows=[
                {
                    "employee_code": "EMP005",
                    "full_name": "Ravi",
                    "payable_days": "26/28",
                    "base_wage": "₹ 50,000",
                    "earnings": "₹ 46,429",
                    "deductions": "₹ 2,986",
                    "net_pay": "₹ 43,443",
                    "loss_of_pay": "₹ 3,357",
                    "status": "GENERATED",
                }
            ],
            summary={"period": "February 2026", "employees": 1, "total_net_pay": "₹ 43,443"},
        )


@pytest.fixture()
def service():
    return FakePayrollService()


@pytest.fixture()
def client(service):
    app = Flask(__name__)
    app.secret_key = "test-secret"
    app.config.update(CRON_SECRET="cron-secret", PAYROLL_HISTORY_LIMIT=12, TESTING=True)
    register(app, SimpleNamespace(payroll_service=service, simulator_service=None))
    return app.test_client()


def _login(client, role=Role.EMPLOYEE):
    with client.session_transaction() as sess:
        sess["user_id"] = 5
        sess["role"] = role.value


def test_process_requires_admin(client):
    assert client.post("/api/admin/payroll/process", json={"month": 1, "year": 2026}).status_code == 401

    _login(client)
    forbidden = client.post("/api/admin/payroll/process", json={"month": 1, "year": 2026})
    assert forbidden.status_code == 403
    assert forbidden.get_json() == {"error": "Admin access required"}


def test_process_returns_breakdown_and_skipped(client, service):
    _login(client, Role.ADMIN)

    resp = client.post("/api/admin/payroll/process", json={"month": 0, "year": 2026})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["processed"] == 1
    assert body["skipped"] == 1
    assert body["payrolls"][0]["breakdown"]["netPay"] == 43443
    assert body["skippedEmployees"][0]["employeeId"] == "EMP006"
    assert service.calls == [("generate", 0, 2026)]


def test_process_validation(client):
    _login(client, Role.ADMIN)

    missing = client.post("/api/admin/payroll/process", json={"year": 2026})
    assert missing.status_code == 400
    assert missing.get_json() == {"error": "Month and Year required"}

    invalid = client.post("/api/admin/payroll/process", json={"month": 12, "year": 2026})
    assert invalid.status_code == 400


def test_cron_requires_bearer_secret(client, service):
    assert client.get("/api/cron/auto-payroll").status_code == 401
    assert client.get("/api/cron/auto-payroll", headers={"Authorization": "Bearer wrong"}).status_code == 401

    resp = client.get("/api/cron/auto-payroll", headers={"Authorization": "Bearer cron-secret"})
    assert resp.status_code == 200
    assert resp.get_json()["skipped"] is True


def test_history_uses_configured_limit(client, service):
    _login(client)

    resp = client.get("/api/payroll/history")

    assert resp.status_code == 200
    assert resp.get_json()["payrolls"][0]["netPay"] == 43443
    assert service.calls[-1] == ("history", 5, 12)


def test_payslip_missing_is_400(client):
    _login(client)

    assert client.get("/api/payroll/payslip?month=1&year=2026").get_json()["payslip"]["payableDays"] == 26
    resp = client.get("/api/payroll/payslip?month=2&year=2026")
    assert resp.status_code == 400
    assert "No payroll generated" in resp.get_json()["error"]


def test_report_csv_and_xlsx(client):
    _login(client, Role.ADMIN)

    csv_resp = client.get("/api/admin/reports/payroll?month=1&year=2026&format=csv")
    assert csv_resp.status_code == 200
    assert csv_resp.mimetype == "text/csv"
    assert "payroll_2026_02.csv" in csv_resp.headers["Content-Disposition"]
    text = csv_resp.data.decode("utf-8-sig")
    assert text.splitlines()[0].startswith("employee_code,full_name,payable_days")
    assert "EMP005" in text

    xlsx_resp = client.get("/api/admin/reports/payroll?month=1&year=2026&format=xlsx")
    assert xlsx_resp.status_code == 200
    df = pd.read_excel(io.BytesIO(xlsx_resp.data), sheet_name="Payroll")
    assert list(df["employee_code"]) == ["EMP005"]

    assert client.get("/api/admin/reports/payroll?month=1&year=2026&format=pdf").status_code == 400


def test_create_app_registers_routes_without_touching_database(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    app = create_app()

    rules = {r.rule for r in app.url_map.iter_rules()}
    assert "/api/payroll/simulator" in rules
    assert "/api/cron/auto-payroll" in rules
    assert app.config["CRON_SECRET"] == "test-cron-secret"
    assert app.config["TESTING"] is True


@pytest.mark.parametrize("secret", [None, ""])
def test_cron_refuses_everything_without_configured_secret(service, secret):
    app = Flask(__name__)
    app.secret_key = "test-secret"
    app.config.update(CRON_SECRET=secret, PAYROLL_HISTORY_LIMIT=12, TESTING=True)
    register(app, SimpleNamespace(payroll_service=service, simulator_service=None))
    client = app.test_client()

    for header in ("Bearer ", "Bearer None", "Bearer please-set-CRON_SECRET"):
        assert client.get("/api/cron/auto-payroll", headers={"Authorization": header}).status_code == 401
    assert service.calls == []


def test_production_settings_leave_cron_secret_unset(monkeypatch):
    import config.config as base
    import config.production as production

    monkeypatch.delenv("CRON_SECRET", raising=False)
    importlib.reload(base)
    try:
        assert importlib.reload(production).CRON_SECRET is None
    finally:
        importlib.reload(base)
        importlib.reload(production)
