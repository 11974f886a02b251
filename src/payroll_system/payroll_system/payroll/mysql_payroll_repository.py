from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, fetchone
from .model import PayrollBreakdown, PayrollRecord, SalaryStructure
from .repository import PayrollRepository, SalaryRepository

_PAYROLL_COLUMNS = """
    payroll_id, user_id, month, year, base_wage, total_earnings, total_deductions,
    net_pay, payable_days, days_in_month, loss_of_pay, status, created_at
"""


def _to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        user_id=int(r["user_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        base_wage=float(r["base_wage"]),
        total_earnings=float(r["total_earnings"]),
        total_deductions=float(r["total_deductions"]),
        net_pay=float(r["net_pay"]),
        payable_days=int(r["payable_days"]),
        days_in_month=int(r["days_in_month"]),
        loss_of_pay=float(r["loss_of_pay"]),
        status=PayrollStatus(r["status"]),
        created_at=r.get("created_at"),
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user(self, user_id: int) -> Optional[SalaryStructure]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT wage, basic, hra, std_allowance, fixed_allowance, performance_bonus, lta, pf, prof_tax
                FROM salary_structures
                WHERE user_id=%s
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            # DECIMAL columns come back as Decimal; the calculator works on floats.
            values = {k: (float(v) if v is not None else None) for k, v in row.items()}
            return SalaryStructure.from_mapping(values)


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def replace_for_period(self, *, user_id: int, month: int, year: int, breakdown: PayrollBreakdown) -> PayrollRecord:
        # DELETE and INSERT share one transaction: a failed insert rolls the delete back.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM payrolls WHERE user_id=%s AND month=%s AND year=%s",
                (int(user_id), int(month), int(year)),
            )
            cur.execute(
                """
                INSERT INTO payrolls(
                    user_id, month, year, base_wage, total_earnings, total_deductions,
                    net_pay, payable_days, days_in_month, loss_of_pay, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    int(month),
                    int(year),
                    breakdown.base_wage,
                    breakdown.total_earnings,
                    breakdown.total_deductions,
                    breakdown.net_pay,
                    breakdown.payable_days,
                    breakdown.days_in_month,
                    breakdown.loss_of_pay,
                    PayrollStatus.GENERATED.value,
                ),
            )
            payroll_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_PAYROLL_COLUMNS} FROM payrolls WHERE payroll_id=%s", (payroll_id,))
            return _to_record(fetchone(cur))

    def count_for_period(self, *, month: int, year: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM payrolls WHERE month=%s AND year=%s",
                (int(month), int(year)),
            )
            return fetch_count(cur)

    def get_for_user_period(self, *, user_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_PAYROLL_COLUMNS} FROM payrolls WHERE user_id=%s AND month=%s AND year=%s",
                (int(user_id), int(month), int(year)),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_user(self, *, user_id: int, limit: int) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_PAYROLL_COLUMNS}
                FROM payrolls
                WHERE user_id=%s
                ORDER BY year DESC, month DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_report_rows(self, *, month: int, year: int) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT p.user_id, u.employee_code, u.full_name,
                       p.base_wage, p.total_earnings, p.total_deductions, p.net_pay,
                       p.payable_days, p.days_in_month, p.loss_of_pay, p.status
                FROM payrolls p
                JOIN users u ON u.user_id = p.user_id
                WHERE p.month=%s AND p.year=%s
                ORDER BY u.full_name
                """,
                (int(month), int(year)),
            )
            return fetchall(cur)

    def delete_before_period(self, *, user_id: int, month: int, year: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                DELETE FROM payrolls
                WHERE user_id=%s AND (year < %s OR (year = %s AND month < %s))
                """,
                (int(user_id), int(year), int(year), int(month)),
            )
            return int(cur.rowcount or 0)

    def delete_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payrolls")
            return int(cur.rowcount or 0)
