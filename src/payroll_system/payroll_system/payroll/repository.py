from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PayrollBreakdown, PayrollRecord, SalaryStructure


class SalaryRepository(Protocol):
    def get_for_user(self, user_id: int) -> Optional[SalaryStructure]:
        """The employee's salary structure, or None when none is defined.

        Raises ValidationError when a stored row is incomplete or invalid.
        """

        raise NotImplementedError


class PayrollRepository(Protocol):
    def replace_for_period(self, *, user_id: int, month: int, year: int, breakdown: PayrollBreakdown) -> PayrollRecord:
        """Delete any row for (user, month, year) and insert ``breakdown`` in one transaction.

        If the insert fails the previous row is kept.
        """

        raise NotImplementedError

    def count_for_period(self, *, month: int, year: int) -> int:
        raise NotImplementedError

    def get_for_user_period(self, *, user_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def list_for_user(self, *, user_id: int, limit: int) -> Sequence[PayrollRecord]:
        """Newest period first."""

        raise NotImplementedError

    def list_report_rows(self, *, month: int, year: int) -> Sequence[dict]:
        """Payroll rows of a period joined with employee name/code (report read-model)."""

        raise NotImplementedError

    def delete_before_period(self, *, user_id: int, month: int, year: int) -> int:
        """Delete the user's rows for periods strictly before (month, year)."""

        raise NotImplementedError

    def delete_all(self) -> int:
        raise NotImplementedError
