from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, new_id
from .model import GeoPoint, Geofence
from .repository import GeofenceRepository

_COLUMNS = "id, name, latitude, longitude, radius, active, created_at"


def _to_geofence(r: Dict[str, Any]) -> Geofence:
    return Geofence(
        geofence_id=str(r["id"]),
        name=str(r["name"]),
        center=GeoPoint(latitude=float(r["latitude"]), longitude=float(r["longitude"])),
        radius_meters=float(r["radius"]),
        active=bool(r["active"]),
        created_at=from_db_datetime(r.get("created_at")),
    )


class MySQLGeofenceRepository(GeofenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Geofence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM geofences ORDER BY created_at DESC, id DESC")
            return [_to_geofence(r) for r in fetchall(cur)]

    def list_active(self) -> Sequence[Geofence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM geofences WHERE active=1 ORDER BY created_at ASC, id ASC")
            return [_to_geofence(r) for r in fetchall(cur)]

    def get_by_id(self, geofence_id: str) -> Optional[Geofence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM geofences WHERE id=%s", (geofence_id,))
            r = fetchone(cur)
            return _to_geofence(r) if r else None

    def create(self, *, name: str, latitude: float, longitude: float, radius_meters: float) -> Geofence:
        geofence_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO geofences(id, name, latitude, longitude, radius, active)
                VALUES(%s,%s,%s,%s,%s,1)
                """,
                (geofence_id, name, latitude, longitude, radius_meters),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM geofences WHERE id=%s", (geofence_id,))
            return _to_geofence(fetchone(cur))

    def set_active(self, geofence_id: str, *, active: bool) -> Optional[Geofence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE geofences SET active=%s WHERE id=%s", (1 if active else 0, geofence_id))
            cur.execute(f"SELECT {_COLUMNS} FROM geofences WHERE id=%s", (geofence_id,))
            r = fetchone(cur)
            return _to_geofence(r) if r else None

    def delete_by_id(self, geofence_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM geofences WHERE id=%s", (geofence_id,))
            return cur.rowcount > 0
