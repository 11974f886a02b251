from .config import DB_CONFIG, Config, env_flag

SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = dict(DB_CONFIG)
CRON_SECRET = Config.CRON_SECRET or "dev-cron-secret"

DEBUG = True
LOG_LEVEL = "DEBUG"

MERGE_LEAVE_OVERLAPS = Config.MERGE_LEAVE_OVERLAPS
USE_DEFAULT_SALARY = Config.USE_DEFAULT_SALARY
PAYROLL_HISTORY_LIMIT = Config.PAYROLL_HISTORY_LIMIT

# If enabled, the app applies database/schema.sql on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
