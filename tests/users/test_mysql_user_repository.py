from __future__ import annotations

from datetime import datetime

from src.ponto_digital.ponto_digital.core.enums import Role
from src.ponto_digital.ponto_digital.users.mysql_user_repository import MySQLUserRepository


class RecordingCursor:
    def __init__(self, rows):
        self.rows = rows
        self.executed: list[tuple[str, tuple]] = []

    def execute(self, sql, params=()):
        self.executed.append((sql, params))

    def fetchall(self):
        return self.rows

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def close(self):
        pass


class RecordingConnection:
    def __init__(self, cursor: RecordingCursor):
        self._cursor = cursor
        self.committed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        pass

    def close(self):
        pass


class RecordingFactory:
    def __init__(self, rows=()):
        self.cursor = RecordingCursor(list(rows))

    def connect(self, *, with_database: bool = True):
        return RecordingConnection(self.cursor)


def test_list_by_name_compares_names_byte_for_byte():
    factory = RecordingFactory(
        [
            {
                "id": "u1",
                "name": "José",
                "role": "funcionario",
                "part_time": 0,
                "work_start_time": None,
                "work_end_time": None,
                "created_at": datetime(2026, 1, 1, 12, 0),
            }
        ]
    )

    [user] = MySQLUserRepository(factory).list_by_name("José")

    [(sql, params)] = factory.cursor.executed
    assert "name = %s COLLATE utf8mb4_bin" in sql
    assert params == ("José",)
    assert user.name == "José"
    assert user.role is Role.EMPLOYEE
