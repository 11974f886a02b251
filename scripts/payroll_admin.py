"""Payroll maintenance from the command line (no Flask).

    python scripts/payroll_admin.py generate --month 1 --year 2026
    python scripts/payroll_admin.py auto
    python scripts/payroll_admin.py clean
    python scripts/payroll_admin.py reset --yes

``--month`` is zero-indexed (0 = January), as stored in payroll rows.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.payroll_system.payroll_system.common.datetime_utils import now_local
from src.payroll_system.payroll_system.common.logging_config import configure_logging
from src.payroll_system.payroll_system.container import build_container
from src.payroll_system.payroll_system.core.exceptions import ValidationError

logger = logging.getLogger("scripts.payroll_admin")


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate, clean or reset payroll rows.")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="generate payroll for one month")
    gen.add_argument("--month", type=int, required=True, help="0-indexed month")
    gen.add_argument("--year", type=int, required=True)
    gen.add_argument("--active-only", action="store_true")

    sub.add_parser("auto", help="month-end run: only acts on the last day of the month")
    sub.add_parser("clean", help="delete rows for months before each employee joined")

    reset = sub.add_parser("reset", help="delete every payroll row")
    reset.add_argument("--yes", action="store_true", help="confirm deletion")

    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    container = build_container(
        db_config=settings.DB_CONFIG,
        merge_leave_overlaps=bool(getattr(settings, "MERGE_LEAVE_OVERLAPS", False)),
        use_default_salary=bool(getattr(settings, "USE_DEFAULT_SALARY", True)),
    )
    service = container.payroll_service
    today = now_local().date()

    try:
        if args.command == "generate":
            result = service.generate_monthly_payroll(
                month=args.month, year=args.year, today=today, active_only=args.active_only
            )
            logger.info("Generated %d payrolls, skipped %d", result.processed, len(result.skipped))
            for s in result.skipped:
                logger.info("  skipped %s (%s): %s", s.name, s.employee_code or "-", s.reason)
        elif args.command == "auto":
            result = service.run_auto_payroll(today=today)
            logger.info(result.message)
        elif args.command == "clean":
            deleted = service.clean_pre_joining_payrolls()
            logger.info("Cleaned %d payroll rows across %d employees", sum(deleted.values()), len(deleted))
        elif args.command == "reset":
            if not args.yes:
                logger.error("Refusing to delete all payroll rows without --yes")
                return 2
            logger.info("Deleted %d payroll rows", service.reset_payrolls())
    except ValidationError as e:
        logger.error("Error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
