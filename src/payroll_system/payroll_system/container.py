from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository, MySQLSalaryRepository
from .payroll.service import PayrollService
from .payroll.simulator import SalarySimulatorService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    attendance_repo: MySQLAttendanceRepository
    leaves_repo: MySQLLeaveRepository
    salaries_repo: MySQLSalaryRepository
    payrolls_repo: MySQLPayrollRepository

    calculator: StandardPayrollCalculator
    payroll_service: PayrollService
    simulator_service: SalarySimulatorService


def build_container(*, db_config: dict, merge_leave_overlaps: bool = False, use_default_salary: bool = True) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    salaries_repo = MySQLSalaryRepository(conn)
    payrolls_repo = MySQLPayrollRepository(conn)

    # One calculator instance shared by batch generation and the simulator.
    calculator = StandardPayrollCalculator(merge_leave_overlaps=merge_leave_overlaps)

    payroll_service = PayrollService(
        employees_repo,
        attendance_repo,
        leaves_repo,
        salaries_repo,
        payrolls_repo,
        calculator=calculator,
        use_default_salary=use_default_salary,
    )
    simulator_service = SalarySimulatorService(
        employees_repo,
        attendance_repo,
        leaves_repo,
        salaries_repo,
        calculator=calculator,
        use_default_salary=use_default_salary,
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        salaries_repo=salaries_repo,
        payrolls_repo=payrolls_repo,
        calculator=calculator,
        payroll_service=payroll_service,
        simulator_service=simulator_service,
    )
