from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_employees(self, *, active_only: bool = False) -> Sequence[Employee]:
        """Users with role EMPLOYEE, ordered by user_id."""

        raise NotImplementedError
