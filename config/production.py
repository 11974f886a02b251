import os

from .config import DB_CONFIG, Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = dict(DB_CONFIG)
CRON_SECRET = Config.CRON_SECRET

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

MERGE_LEAVE_OVERLAPS = Config.MERGE_LEAVE_OVERLAPS
USE_DEFAULT_SALARY = Config.USE_DEFAULT_SALARY
PAYROLL_HISTORY_LIMIT = Config.PAYROLL_HISTORY_LIMIT

AUTO_INIT_DB = Config.AUTO_INIT_DB
