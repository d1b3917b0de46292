from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import RecordType
from ..geofences.model import DeviceLocation


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one successful clock action ("ponto").

    Events carry no entrada/saída type; that is derived when reading.
    """

    record_id: str
    user_id: str
    device_id: str
    timestamp: datetime
    location: DeviceLocation
    geofence_id: Optional[str] = None
    ip: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValueError("AttendanceEvent.user_id is required")
        if self.timestamp.tzinfo is None or self.timestamp.utcoffset() is None:
            raise ValueError("AttendanceEvent.timestamp must be timezone-aware")


@dataclass(frozen=True)
class RecordRow:
    """Read-model for the admin listing and CSV export (event + display names)."""

    event: AttendanceEvent
    user_name: Optional[str] = None
    geofence_name: Optional[str] = None


@dataclass(frozen=True)
class ImportRow:
    """A spreadsheet line after parsing and validation, before name resolution."""

    line_no: int
    user_name: str
    timestamp: datetime
    location: DeviceLocation
    device_id: str
    declared_type: Optional[RecordType] = None
