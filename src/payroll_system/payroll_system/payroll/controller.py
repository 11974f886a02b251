from __future__ import annotations

import csv
import hmac
import io
import logging
from functools import wraps

import pandas as pd
from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container
from .model import GenerationResult, ScenarioProjection, SimulationResult

logger = logging.getLogger(__name__)

REPORT_FIELDS = [
    "employee_code",
    "full_name",
    "payable_days",
    "base_wage",
    "earnings",
    "deductions",
    "net_pay",
    "loss_of_pay",
    "status",
]


def _generation_json(result: GenerationResult) -> dict:
    payrolls = []
    for item in result.payrolls:
        row = item.record.to_dict()
        row.update(
            {
                "name": item.name,
                "employeeId": item.employee_code,
                "breakdown": item.breakdown.to_dict(),
            }
        )
        payrolls.append(row)

    body = {
        "success": True,
        "payrolls": payrolls,
        "processed": result.processed,
        "skipped": len(result.skipped),
    }
    if result.skipped:
        body["skippedEmployees"] = [
            {"employeeId": s.employee_code, "name": s.name, "reason": s.reason} for s in result.skipped
        ]
    return body


def _scenario_json(scenario: ScenarioProjection) -> dict:
    return {
        "estimatedPayableDays": scenario.estimated_payable_days,
        "projectedAttendance": scenario.projected_attendance,
        "breakdown": scenario.breakdown.to_dict(),
    }


def _simulation_json(result: SimulationResult) -> dict:
    s = result.stats
    return {
        "salary": result.salary.to_dict(),
        "usedDefaultSalary": result.used_default_salary,
        "currentStats": {
            "presentDays": s.present_days,
            "absentDays": s.absent_days,
            "approvedLeaves": s.approved_leave_days,
            "weekendsSoFar": s.weekends_so_far,
            "weekends": s.total_weekends,
            "workingDaysSoFar": s.working_days_so_far,
            "remainingWorkingDays": s.remaining_working_days,
            "remainingWeekends": s.remaining_weekends,
            "daysInMonth": s.days_in_month,
            "monthName": s.month_label,
        },
        "scenarios": {
            "optimistic": _scenario_json(result.optimistic),
            "realistic": _scenario_json(result.realistic),
            "pessimistic": _scenario_json(result.pessimistic),
        },
        "leaveBalance": result.leave_balance,
    }


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"error": "Unauthorized"}), 401
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"error": "Unauthorized"}), 401
            if session.get("role") != Role.ADMIN.value:
                raise AuthorizationError("Admin access required")
            return view(*args, **kwargs)

        return wrapper

    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(AuthorizationError)
    def _authorization_error(e: AuthorizationError):
        return jsonify({"error": str(e)}), 403

    def _write_report_csv(*, data, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REPORT_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    def _write_report_xlsx(*, data, filename: str):
        df = pd.DataFrame(data.rows, columns=REPORT_FIELDS)
        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Payroll")
            pd.DataFrame([data.summary]).to_excel(writer, index=False, sheet_name="Summary")
        return app.response_class(
            output.getvalue(),
            mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/admin/payroll/process", methods=["POST"], endpoint="payroll_process")
    @admin_required
    def payroll_process():
        body = request.get_json(silent=True) or {}
        month, year = body.get("month"), body.get("year")
        if month is None or not year:
            return jsonify({"error": "Month and Year required"}), 400

        result = container.payroll_service.generate_monthly_payroll(
            month=month,
            year=year,
            today=now_local().date(),
        )
        logger.info(
            "Admin user_id=%s processed payroll %s-%s (%d employees)",
            session.get("user_id"),
            result.year,
            result.month,
            result.processed,
        )
        return jsonify(_generation_json(result))

    @app.route("/api/cron/auto-payroll", methods=["GET"], endpoint="payroll_auto")
    def payroll_auto():
        secret = app.config.get("CRON_SECRET")
        if not secret:
            logger.error("CRON_SECRET is not configured; refusing auto-payroll request")
            return jsonify({"error": "Unauthorized"}), 401
        provided = request.headers.get("Authorization", "")
        if not hmac.compare_digest(provided.encode(), f"Bearer {secret}".encode()):
            return jsonify({"error": "Unauthorized"}), 401

        today = now_local().date()
        result = container.payroll_service.run_auto_payroll(today=today)
        body = {
            "message": result.message,
            "month": result.month + 1,
            "year": result.year,
            "skipped": result.skipped,
        }
        if result.existing_count:
            body["count"] = result.existing_count
        if result.generation is not None:
            gen = _generation_json(result.generation)
            body.update(
                {
                    "success": True,
                    "generated": gen["processed"],
                    "skipped": gen["skipped"],
                    "skippedEmployees": gen.get("skippedEmployees", []),
                }
            )
        return jsonify(body)

    @app.route("/api/payroll/simulator", methods=["GET"], endpoint="payroll_simulator")
    @login_required
    def payroll_simulator():
        result = container.simulator_service.simulate(int(session["user_id"]), today=now_local().date())
        return jsonify(_simulation_json(result))

    @app.route("/api/payroll/history", methods=["GET"], endpoint="payroll_history")
    @login_required
    def payroll_history():
        limit = request.args.get("limit", type=int) or app.config["PAYROLL_HISTORY_LIMIT"]
        rows = container.payroll_service.get_history(int(session["user_id"]), limit=limit)
        return jsonify({"payrolls": [r.to_dict() for r in rows]})

    @app.route("/api/payroll/payslip", methods=["GET"], endpoint="payroll_payslip")
    @login_required
    def payroll_payslip():
        record = container.payroll_service.get_payslip(
            int(session["user_id"]),
            month=request.args.get("month"),
            year=request.args.get("year"),
        )
        return jsonify({"payslip": record.to_dict()})

    @app.route("/api/admin/reports/payroll", methods=["GET"], endpoint="payroll_report")
    @admin_required
    def payroll_report():
        data = container.payroll_service.build_report(
            month=request.args.get("month"),
            year=request.args.get("year"),
        )
        fmt = (request.args.get("format") or "json").lower()
        stem = f"payroll_{request.args.get('year')}_{int(request.args.get('month')) + 1:02d}"
        if fmt == "csv":
            return _write_report_csv(data=data, filename=f"{stem}.csv")
        if fmt == "xlsx":
            return _write_report_xlsx(data=data, filename=f"{stem}.xlsx")
        if fmt != "json":
            raise ValidationError(f"Unsupported report format: {fmt}")
        return jsonify({"rows": data.rows, "summary": data.summary})
