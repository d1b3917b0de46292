import os

from .config import Config, _db_config

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = _db_config("root")

ADMIN_API_TOKEN = os.getenv("ADMIN_API_TOKEN", "dev-admin-token")
PUBLIC_BASE_URL = Config.PUBLIC_BASE_URL
TIMEZONE = Config.TIMEZONE
EXPECTED_DAILY_MINUTES = Config.EXPECTED_DAILY_MINUTES
EXPECTED_MINUTES_POLICY = Config.EXPECTED_MINUTES_POLICY
UNPAIRED_ENTRY_POLICY = Config.UNPAIRED_ENTRY_POLICY
NEGATIVE_DURATION_POLICY = Config.NEGATIVE_DURATION_POLICY

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
