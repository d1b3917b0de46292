from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import local_day_bounds, now_utc
from ..common.validators import require_float, require_latitude, require_longitude, require_non_empty
from ..core.exceptions import GeofenceRejectedError, NotFoundError, ValidationError
from ..geofences.geo import find_matching_fence
from ..geofences.model import DeviceLocation, GeoPoint, Geofence
from ..geofences.repository import GeofenceRepository
from ..users.model import Employee
from ..users.repository import UserRepository
from ..users.service import DeviceBindingService
from .csv_io import export_records_csv, parse_records_csv
from .model import AttendanceEvent, RecordRow
from .repository import RecordRepository

logger = logging.getLogger(__name__)


def parse_location(payload: Any) -> DeviceLocation:
    """Validate the ``{lat, lon, accuracy}`` object sent by the clock-in page."""
    if not isinstance(payload, dict):
        raise ValidationError("Localização é obrigatória")
    if payload.get("lat") is None or payload.get("lon") is None:
        raise ValidationError("Localização incompleta")
    lat = require_latitude(payload["lat"])
    lon = require_longitude(payload["lon"])
    accuracy = require_float(payload.get("accuracy") or 0, "Precisão")
    if accuracy < 0:
        raise ValidationError("Precisão inválida")
    return DeviceLocation(point=GeoPoint(lat, lon), accuracy=accuracy)


@dataclass(frozen=True)
class ClockResult:
    event: AttendanceEvent
    user: Employee
    geofence: Geofence


@dataclass
class ImportResult:
    imported: int = 0
    total: int = 0
    errors: list[str] = field(default_factory=list)


class ClockService:
    """Use case: bater ponto (device identity + geofence validation)."""

    def __init__(
        self,
        records: RecordRepository,
        geofences: GeofenceRepository,
        bindings: DeviceBindingService,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._records = records
        self._geofences = geofences
        self._bindings = bindings
        self._clock = clock

    def register_point(
        self,
        *,
        device_id: Any,
        location: Any,
        ip: Optional[str] = None,
        geofence_id: Optional[str] = None,
    ) -> ClockResult:
        device_id_s = require_non_empty(device_id, "ID do dispositivo")
        loc = parse_location(location)

        user = self._bindings.identify(device_id_s)

        if geofence_id:
            # QR-code check-in: anchored to one fence, no fallback to the others.
            target = self._geofences.get_by_id(geofence_id)
            if not target or not target.active:
                raise GeofenceRejectedError("Geofence não encontrada ou inativa")
            fence = find_matching_fence(loc.point, [target], target_fence_id=target.geofence_id)
            if fence is None:
                logger.info("Clock-in rejected user=%s fence=%s (outside)", user.user_id, target.geofence_id)
                raise GeofenceRejectedError(
                    f"Você está fora da área permitida ({target.name}). Aproxime-se do local."
                )
        else:
            fence = find_matching_fence(loc.point, self._geofences.list_active())
            if fence is None:
                logger.info("Clock-in rejected user=%s (no active geofence matched)", user.user_id)
                raise GeofenceRejectedError("Fora da área permitida para registro de ponto")

        event = self._records.create(
            user_id=user.user_id,
            device_id=device_id_s,
            timestamp=self._clock(),
            location=loc,
            geofence_id=fence.geofence_id,
            ip=ip,
        )
        logger.info("Clock-in recorded user=%s fence=%s record=%s", user.user_id, fence.geofence_id, event.record_id)
        return ClockResult(event=event, user=user, geofence=fence)


class RecordService:
    """Use cases: listar, excluir, importar e exportar registros brutos."""

    def __init__(self, records: RecordRepository, users: UserRepository, *, tz: tzinfo):
        self._records = records
        self._users = users
        self._tz = tz

    def list_rows(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        user_id: Optional[str] = None,
    ) -> Sequence[RecordRow]:
        lo, hi = local_day_bounds(start, end, self._tz)
        return self._records.list_rows(start=lo, end=hi, user_id=user_id or None)

    def delete(self, record_id: str) -> None:
        if not self._records.delete_by_id(record_id):
            raise NotFoundError("Registro não encontrado")
        logger.info("Record %s deleted", record_id)

    def bulk_delete(self, record_ids: Any) -> int:
        if not isinstance(record_ids, list) or not record_ids:
            raise ValidationError("Lista de IDs é obrigatória")
        ids = [require_non_empty(r, "ID do registro") for r in record_ids]
        deleted = self._records.delete_many(ids)
        logger.info("Bulk delete: %d of %d records removed", deleted, len(ids))
        return deleted

    def import_csv(self, text: str) -> ImportResult:
        rows, errors = parse_records_csv(text, tz=self._tz)
        result = ImportResult(total=len(rows) + len(errors), errors=list(errors))

        for row in rows:
            matches = self._users.list_by_name(row.user_name)
            if not matches:
                result.errors.append(f'Linha {row.line_no}: Usuário "{row.user_name}" não encontrado')
                continue
            if len(matches) > 1:
                result.errors.append(f'Linha {row.line_no}: Nome "{row.user_name}" pertence a mais de um usuário')
                continue

            self._records.create(
                user_id=matches[0].user_id,
                device_id=row.device_id,
                timestamp=row.timestamp,
                location=row.location,
                declared_type=row.declared_type,
            )
            result.imported += 1

        if result.total and not result.imported:
            logger.warning("Import produced no records (%d errors)", len(result.errors))
        else:
            logger.info("Imported %d/%d records", result.imported, result.total)
        return result

    def export_csv(self, **filters: Any) -> bytes:
        rows = self.list_rows(**filters)
        if not rows:
            raise ValidationError("Não há registros para exportar")
        return export_records_csv(rows, tz=self._tz)
