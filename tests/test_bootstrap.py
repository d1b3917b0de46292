from __future__ import annotations

from pathlib import Path

from src.ponto_digital.ponto_digital.database.bootstrap import (
    _strip_create_db_and_use,
    _strip_line_comments,
    iter_sql_statements,
)

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "database" / "schema.sql"


def test_split_ignores_semicolons_inside_strings():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\");\nSELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_schema_creates_every_table_without_switching_database():
    sql = _strip_line_comments(_strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8")))
    statements = list(iter_sql_statements(sql))

    assert not any(s.upper().startswith(("CREATE DATABASE", "USE ")) for s in statements)
    created = [s.split("EXISTS", 1)[1].split("(", 1)[0].strip().strip("`") for s in statements if s.upper().startswith("CREATE TABLE")]
    assert created == ["users", "device_authorizations", "geofences", "records"]
