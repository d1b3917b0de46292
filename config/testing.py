import os

from .config import _db_config

SECRET_KEY = "test-secret"

DB_CONFIG = _db_config("12345")

ADMIN_API_TOKEN = "test-admin-token"
PUBLIC_BASE_URL = "http://ponto.test"
TIMEZONE = "America/Sao_Paulo"
EXPECTED_DAILY_MINUTES = 480
EXPECTED_MINUTES_POLICY = "fixed"
UNPAIRED_ENTRY_POLICY = "zero"
NEGATIVE_DURATION_POLICY = "allow"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
