"""Spreadsheet boundary for raw records.

Import is parse-then-validate: each line either becomes a typed ``ImportRow``
or a line-numbered error message. Nothing loosely typed gets past this module.
"""

from __future__ import annotations

import csv
import io
from datetime import tzinfo
from typing import Iterable, Optional

from ..common.datetime_utils import format_local, parse_local_datetime
from ..common.validators import require_latitude, require_longitude
from ..core.constants import CSV_DELIMITER, IMPORTED_DEVICE_ID, UNKNOWN_USER_NAME
from ..core.enums import RecordType
from ..core.exceptions import ValidationError
from ..geofences.model import DeviceLocation, GeoPoint
from .model import ImportRow, RecordRow

EXPORT_HEADERS = ["Usuário", "Data/Hora", "Latitude", "Longitude", "Device ID"]

_TYPE_ALIASES = {
    "entrada": RecordType.ENTRADA,
    "saida": RecordType.SAIDA,
    "saída": RecordType.SAIDA,
}


def _parse_declared_type(value: str) -> Optional[RecordType]:
    value = value.strip().lower()
    if not value:
        return None
    try:
        return _TYPE_ALIASES[value]
    except KeyError:
        raise ValidationError(f"Tipo inválido: {value!r}") from None


def _parse_location(lat_s: str, lon_s: str) -> DeviceLocation:
    lat_s, lon_s = lat_s.strip(), lon_s.strip()
    if not lat_s or not lon_s:
        return DeviceLocation(point=GeoPoint(0.0, 0.0), accuracy=0.0)
    lat = require_latitude(lat_s.replace(",", "."))
    lon = require_longitude(lon_s.replace(",", "."))
    return DeviceLocation(point=GeoPoint(lat, lon), accuracy=0.0)


def parse_line(parts: list[str], *, line_no: int, tz: tzinfo) -> ImportRow:
    if len(parts) < 5:
        raise ValidationError(f"esperado ao menos 5 colunas, encontrado {len(parts)}")

    user_name, date_time, lat_s, lon_s, device_id = (p.strip() for p in parts[:5])
    if not user_name:
        raise ValidationError("usuário vazio")

    return ImportRow(
        line_no=line_no,
        user_name=user_name,
        timestamp=parse_local_datetime(date_time, tz),
        location=_parse_location(lat_s, lon_s),
        device_id=device_id or IMPORTED_DEVICE_ID,
        declared_type=_parse_declared_type(parts[5]) if len(parts) > 5 else None,
    )


def parse_records_csv(text: str, *, tz: tzinfo) -> tuple[list[ImportRow], list[str]]:
    """Parse the export format; the first non-blank line is the header."""
    text = text.lstrip("\ufeff")
    rows: list[ImportRow] = []
    errors: list[str] = []
    header_seen = False

    for line_no, parts in enumerate(csv.reader(io.StringIO(text), delimiter=CSV_DELIMITER), start=1):
        if not any(p.strip() for p in parts):
            continue
        if not header_seen:
            header_seen = True
            continue
        try:
            rows.append(parse_line(parts, line_no=line_no, tz=tz))
        except ValidationError as e:
            errors.append(f"Linha {line_no}: {e}")

    if not header_seen:
        raise ValidationError("Arquivo vazio ou inválido")
    return rows, errors


def export_records_csv(rows: Iterable[RecordRow], *, tz: tzinfo) -> bytes:
    out = io.StringIO()
    writer = csv.writer(out, delimiter=CSV_DELIMITER, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for row in rows:
        ev = row.event
        writer.writerow(
            [
                row.user_name or UNKNOWN_USER_NAME,
                format_local(ev.timestamp, tz),
                f"{ev.location.point.latitude:.6f}",
                f"{ev.location.point.longitude:.6f}",
                ev.device_id,
            ]
        )
    return out.getvalue().encode("utf-8-sig")
