from __future__ import annotations

import pytest

from src.payroll_system.payroll_system.core.enums import PayrollStatus
from src.payroll_system.payroll_system.payroll.calculator.engine import calculate_complete_payroll
from src.payroll_system.payroll_system.payroll.model import get_default_salary_structure
from src.payroll_system.payroll_system.payroll.mysql_payroll_repository import MySQLPayrollRepository


class FakeDB:
    """Committed payroll rows keyed by (user_id, month, year)."""

    def __init__(self, rows=None, *, fail_insert=False):
        self.rows = dict(rows or {})
        self.fail_insert = fail_insert
        self.next_id = 100
        self.rollbacks = 0

    def connect(self, *, with_database=True):
        return FakeConnection(self)


class FakeConnection:
    def __init__(self, db):
        self._db = db
        self.pending = dict(db.rows)

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self._db.rows = dict(self.pending)

    def rollback(self):
        self._db.rollbacks += 1
        self.pending = dict(self._db.rows)

    def close(self):
        pass


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self._row = None
        self.lastrowid = None
        self.rowcount = 0

    def execute(self, sql, params=()):
        stmt = " ".join(sql.split()).upper()
        db = self._conn._db
        if stmt.startswith("DELETE FROM PAYROLLS WHERE USER_ID=%S AND MONTH=%S AND YEAR=%S"):
            self.rowcount = 1 if self._conn.pending.pop(tuple(params), None) else 0
        elif stmt.startswith("INSERT INTO PAYROLLS"):
            if db.fail_insert:
                raise RuntimeError("insert failed")
            (user_id, month, year, base_wage, earnings, deductions, net, payable, days, lop, status) = params
            db.next_id += 1
            self.lastrowid = db.next_id
            self._conn.pending[(user_id, month, year)] = _row(
                db.next_id, user_id, month, year, base_wage=base_wage, total_earnings=earnings,
                total_deductions=deductions, net_pay=net, payable_days=payable, days_in_month=days,
                loss_of_pay=lop, status=status,
            )
        elif stmt.startswith("SELECT"):
            (payroll_id,) = params
            self._row = next(r for r in self._conn.pending.values() if r["payroll_id"] == payroll_id)
        else:
            raise AssertionError(f"unexpected SQL: {stmt}")

    def fetchone(self):
        return self._row

    def close(self):
        pass


def _row(payroll_id, user_id, month, year, **values):
    row = {
        "payroll_id": payroll_id,
        "user_id": user_id,
        "month": month,
        "year": year,
        "base_wage": 50000,
        "total_earnings": 40000,
        "total_deductions": 2000,
        "net_pay": 38000,
        "payable_days": 22,
        "days_in_month": 28,
        "loss_of_pay": 8800,
        "status": PayrollStatus.GENERATED.value,
        "created_at": None,
    }
    row.update(values)
    return row


def _breakdown():
    return calculate_complete_payroll(
        salary=get_default_salary_structure(), attendance_count=18, weekends=8, approved_leave_days=0, days_in_month=28
    )


def test_failed_insert_keeps_previous_row():
    old = _row(1, 5, 1, 2026)
    db = FakeDB({(5, 1, 2026): old}, fail_insert=True)
    repo = MySQLPayrollRepository(db)

    with pytest.raises(RuntimeError):
        repo.replace_for_period(user_id=5, month=1, year=2026, breakdown=_breakdown())

    assert db.rows == {(5, 1, 2026): old}
    assert db.rollbacks == 1


def test_replace_swaps_row_in_one_commit():
    db = FakeDB({(5, 1, 2026): _row(1, 5, 1, 2026), (6, 1, 2026): _row(2, 6, 1, 2026)})
    repo = MySQLPayrollRepository(db)

    record = repo.replace_for_period(user_id=5, month=1, year=2026, breakdown=_breakdown())

    assert record.payroll_id == 101
    assert record.net_pay == 43443
    assert db.rows[(5, 1, 2026)]["payroll_id"] == 101
    assert db.rows[(6, 1, 2026)]["payroll_id"] == 2
    assert db.rollbacks == 0
