from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import RecordType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    from_db_datetime,
    in_placeholders,
    new_id,
    to_db_datetime,
)
from ..geofences.model import DeviceLocation, GeoPoint
from .model import AttendanceEvent, RecordRow
from .repository import RecordRepository

_COLUMNS = "r.id, r.user_id, r.device_id, r.timestamp, r.geofence_id, r.lat, r.lon, r.accuracy, r.ip"


def _to_event(r: Dict[str, Any]) -> AttendanceEvent:
    return AttendanceEvent(
        record_id=str(r["id"]),
        user_id=str(r["user_id"]),
        device_id=r["device_id"],
        timestamp=from_db_datetime(r["timestamp"]),
        location=DeviceLocation(
            point=GeoPoint(latitude=float(r["lat"]), longitude=float(r["lon"])),
            accuracy=float(r.get("accuracy") or 0),
        ),
        geofence_id=r.get("geofence_id"),
        ip=r.get("ip"),
    )


class MySQLRecordRepository(RecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: str,
        device_id: str,
        timestamp: datetime,
        location: DeviceLocation,
        geofence_id: Optional[str] = None,
        ip: Optional[str] = None,
        declared_type: Optional[RecordType] = None,
    ) -> AttendanceEvent:
        record_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO records(id, user_id, device_id, timestamp, geofence_id, lat, lon, accuracy, ip, record_type)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record_id,
                    user_id,
                    device_id,
                    to_db_datetime(timestamp),
                    geofence_id,
                    location.point.latitude,
                    location.point.longitude,
                    location.accuracy,
                    ip,
                    declared_type.value if declared_type else None,
                ),
            )
        return AttendanceEvent(
            record_id=record_id,
            user_id=user_id,
            device_id=device_id,
            timestamp=timestamp,
            location=location,
            geofence_id=geofence_id,
            ip=ip,
        )

    def get_by_id(self, record_id: str) -> Optional[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM records r WHERE r.id=%s", (record_id,))
            r = fetchone(cur)
            return _to_event(r) if r else None

    def list_rows(
        self,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        user_id: Optional[str] = None,
    ) -> Sequence[RecordRow]:
        where = []
        params: list[Any] = []
        if start is not None:
            where.append("r.timestamp >= %s")
            params.append(to_db_datetime(start))
        if end is not None:
            where.append("r.timestamp < %s")
            params.append(to_db_datetime(end))
        if user_id:
            where.append("r.user_id = %s")
            params.append(user_id)

        sql = f"""
            SELECT {_COLUMNS}, u.name AS user_name, g.name AS geofence_name
            FROM records r
            LEFT JOIN users u ON u.id = r.user_id
            LEFT JOIN geofences g ON g.id = r.geofence_id
        """
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY r.timestamp DESC, r.id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                RecordRow(event=_to_event(r), user_name=r.get("user_name"), geofence_name=r.get("geofence_name"))
                for r in fetchall(cur)
            ]

    def delete_by_id(self, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM records WHERE id=%s", (record_id,))
            return cur.rowcount > 0

    def delete_many(self, record_ids: Sequence[str]) -> int:
        if not record_ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM records WHERE id IN ({in_placeholders(record_ids)})", tuple(record_ids))
            return int(cur.rowcount)
