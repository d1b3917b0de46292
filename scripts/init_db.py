from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.ponto_digital.ponto_digital.database.bootstrap import apply_schema, list_tables
from src.ponto_digital.ponto_digital.database.connection import DatabaseConnection, DBConfig

logger = logging.getLogger("init_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s %(message)s")

    db_config = DBConfig.from_dict(dict(settings.DB_CONFIG))
    conn = DatabaseConnection.get_instance(db_config)

    count = apply_schema(conn, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(conn)
    logger.info(
        "Applied schema.sql (%d statements) -> %s@%s:%s/%s (tables=%s)",
        count,
        db_config.user,
        db_config.host,
        db_config.port,
        db_config.database,
        ", ".join(sorted(tables)),
    )


if __name__ == "__main__":
    main()
