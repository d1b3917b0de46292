from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, new_id
from .device_model import DeviceAuthorization
from .device_repository import DeviceRepository

_COLUMNS = "id, user_id, device_id, device_name, authorized_at"


def to_device(r: Dict[str, Any]) -> DeviceAuthorization:
    return DeviceAuthorization(
        authorization_id=str(r["id"]),
        user_id=str(r["user_id"]),
        device_id=r["device_id"],
        device_name=r.get("device_name"),
        authorized_at=from_db_datetime(r.get("authorized_at")),
    )


class MySQLDeviceRepository(DeviceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_by_device_id(self, device_id: str) -> Sequence[DeviceAuthorization]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM device_authorizations WHERE device_id=%s", (device_id,))
            return [to_device(r) for r in fetchall(cur)]

    def get_for_user(self, user_id: str, device_id: str) -> Optional[DeviceAuthorization]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM device_authorizations WHERE user_id=%s AND device_id=%s",
                (user_id, device_id),
            )
            r = fetchone(cur)
            return to_device(r) if r else None

    def create(self, *, user_id: str, device_id: str, device_name: Optional[str] = None) -> DeviceAuthorization:
        authorization_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO device_authorizations(id, user_id, device_id, device_name)
                VALUES(%s,%s,%s,%s)
                """,
                (authorization_id, user_id, device_id, device_name),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM device_authorizations WHERE id=%s", (authorization_id,))
            return to_device(fetchone(cur))

    def rename(self, user_id: str, device_id: str, *, device_name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE device_authorizations SET device_name=%s WHERE user_id=%s AND device_id=%s",
                (device_name, user_id, device_id),
            )
            return cur.rowcount > 0

    def delete(self, user_id: str, device_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM device_authorizations WHERE user_id=%s AND device_id=%s",
                (user_id, device_id),
            )
            return cur.rowcount > 0
