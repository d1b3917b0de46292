from __future__ import annotations

from datetime import time
from typing import Any, Dict, List, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    from_db_datetime,
    in_placeholders,
    new_id,
    normalize_mysql_time,
)
from .device_model import DeviceAuthorization
from .model import Employee
from .mysql_device_repository import to_device
from .repository import UserRepository

_COLUMNS = "id, name, role, part_time, work_start_time, work_end_time, created_at"


def _to_employee(row: Dict[str, Any], devices: tuple[DeviceAuthorization, ...] = ()) -> Employee:
    return Employee(
        user_id=str(row["id"]),
        name=row["name"],
        role=Role(row["role"]),
        part_time=bool(row.get("part_time", False)),
        work_start_time=normalize_mysql_time(row.get("work_start_time")),
        work_end_time=normalize_mysql_time(row.get("work_end_time")),
        created_at=from_db_datetime(row.get("created_at")),
        devices=devices,
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_by_name(self, name: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE name = %s COLLATE utf8mb4_bin ORDER BY created_at ASC", (name,))
            return [_to_employee(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY name ASC, id ASC")
            return [_to_employee(r) for r in fetchall(cur)]

    def list_with_devices(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY created_at DESC, id DESC")
            rows = fetchall(cur)
            devices = self._devices_by_user(cur, [r["id"] for r in rows])
            return [_to_employee(r, tuple(devices.get(r["id"], []))) for r in rows]

    def get_with_devices(self, user_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            if not row:
                return None
            devices = self._devices_by_user(cur, [row["id"]])
            return _to_employee(row, tuple(devices.get(row["id"], [])))

    @staticmethod
    def _devices_by_user(cur, user_ids: List[str]) -> Dict[str, List[DeviceAuthorization]]:
        if not user_ids:
            return {}
        cur.execute(
            f"""
            SELECT id, user_id, device_id, device_name, authorized_at
            FROM device_authorizations
            WHERE user_id IN ({in_placeholders(user_ids)})
            ORDER BY authorized_at ASC
            """,
            tuple(user_ids),
        )
        out: Dict[str, List[DeviceAuthorization]] = {}
        for r in fetchall(cur):
            out.setdefault(r["user_id"], []).append(to_device(r))
        return out

    def create(
        self,
        *,
        name: str,
        role: Role,
        part_time: bool = False,
        work_start_time: Optional[time] = None,
        work_end_time: Optional[time] = None,
    ) -> Employee:
        user_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(id, name, role, part_time, work_start_time, work_end_time)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (user_id, name, role.value, 1 if part_time else 0, work_start_time, work_end_time),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (user_id,))
            return _to_employee(fetchone(cur))

    def update(
        self,
        user_id: str,
        *,
        name: str,
        part_time: bool,
        work_start_time: Optional[time],
        work_end_time: Optional[time],
    ) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET name=%s, part_time=%s, work_start_time=%s, work_end_time=%s
                WHERE id=%s
                """,
                (name, 1 if part_time else 0, work_start_time, work_end_time, user_id),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def delete_by_id(self, user_id: str) -> bool:
        # device_authorizations and records cascade.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (user_id,))
            return cur.rowcount > 0
