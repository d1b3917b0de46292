from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RecordType
from ..geofences.model import DeviceLocation
from .model import AttendanceEvent, RecordRow


class RecordRepository(Protocol):
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
        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[AttendanceEvent]:
        raise NotImplementedError

    def list_rows(
        self,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        user_id: Optional[str] = None,
    ) -> Sequence[RecordRow]:
        """Events in ``[start, end)`` joined with names, newest first."""

        raise NotImplementedError

    def delete_by_id(self, record_id: str) -> bool:
        raise NotImplementedError

    def delete_many(self, record_ids: Sequence[str]) -> int:
        raise NotImplementedError
