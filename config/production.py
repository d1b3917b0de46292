import os

from .config import Config, _db_config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = _db_config("")

# Empty token refuses every admin request until it is configured.
ADMIN_API_TOKEN = Config.ADMIN_API_TOKEN
PUBLIC_BASE_URL = Config.PUBLIC_BASE_URL
TIMEZONE = Config.TIMEZONE
EXPECTED_DAILY_MINUTES = Config.EXPECTED_DAILY_MINUTES
EXPECTED_MINUTES_POLICY = Config.EXPECTED_MINUTES_POLICY
UNPAIRED_ENTRY_POLICY = Config.UNPAIRED_ENTRY_POLICY
NEGATIVE_DURATION_POLICY = Config.NEGATIVE_DURATION_POLICY

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
