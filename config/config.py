"""Shared settings read from the environment.

The per-environment modules (development/testing/production) import from here
and override what differs.
"""

import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.environ.get(name, default)))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "payroll_db")

    # Shared secret expected in "Authorization: Bearer <secret>" by the month-end job.
    # Unset means the cron route refuses every request.
    CRON_SECRET = os.environ.get("CRON_SECRET") or None

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Leave overlap union changes generated numbers; off keeps historical rows reproducible.
    MERGE_LEAVE_OVERLAPS = env_flag("MERGE_LEAVE_OVERLAPS", "0")
    # Employees without a salary structure are paid on the company default.
    USE_DEFAULT_SALARY = env_flag("USE_DEFAULT_SALARY", "1")

    PAYROLL_HISTORY_LIMIT = int(os.environ.get("PAYROLL_HISTORY_LIMIT", "12"))

    AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}
