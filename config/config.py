import os


def _db_config(default_password: str) -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "ponto_digital"),
    }


class Config:
    """Settings shared by every environment (policy knobs of the bank of hours)."""

    # Single zone used to decide which calendar day a punch belongs to.
    TIMEZONE = os.getenv("TIMEZONE", "America/Sao_Paulo")

    PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:5000")
    ADMIN_API_TOKEN = os.getenv("ADMIN_API_TOKEN", "")

    # fixed: EXPECTED_DAILY_MINUTES for everyone; shift: per-employee work window.
    EXPECTED_DAILY_MINUTES = int(os.getenv("EXPECTED_DAILY_MINUTES", "480"))
    EXPECTED_MINUTES_POLICY = os.getenv("EXPECTED_MINUTES_POLICY", "fixed")
    # zero: lone trailing entrada counts 0 minutes; pending: day held out of the balance.
    UNPAIRED_ENTRY_POLICY = os.getenv("UNPAIRED_ENTRY_POLICY", "zero")
    # allow: saída before entrada yields negative minutes; clamp: counts 0.
    NEGATIVE_DURATION_POLICY = os.getenv("NEGATIVE_DURATION_POLICY", "allow")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
