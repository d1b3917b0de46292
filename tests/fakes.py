from __future__ import annotations

from dataclasses import replace
from datetime import datetime, time, timezone
from typing import Optional, Sequence

from src.ponto_digital.ponto_digital.core.enums import RecordType, Role
from src.ponto_digital.ponto_digital.geofences.model import DeviceLocation, GeoPoint, Geofence
from src.ponto_digital.ponto_digital.records.model import AttendanceEvent, RecordRow
from src.ponto_digital.ponto_digital.users.device_model import DeviceAuthorization
from src.ponto_digital.ponto_digital.users.model import Employee


class InMemoryDevices:
    def __init__(self, bindings: Sequence[DeviceAuthorization] = ()):
        self.bindings: list[DeviceAuthorization] = list(bindings)

    def list_by_device_id(self, device_id: str):
        return [b for b in self.bindings if b.device_id == device_id]

    def get_for_user(self, user_id: str, device_id: str) -> Optional[DeviceAuthorization]:
        for b in self.bindings:
            if b.user_id == user_id and b.device_id == device_id:
                return b
        return None

    def create(self, *, user_id: str, device_id: str, device_name=None) -> DeviceAuthorization:
        b = DeviceAuthorization(
            authorization_id=f"d{len(self.bindings) + 1}",
            user_id=user_id,
            device_id=device_id,
            device_name=device_name,
        )
        self.bindings.append(b)
        return b

    def rename(self, user_id: str, device_id: str, *, device_name: str) -> bool:
        for i, b in enumerate(self.bindings):
            if b.user_id == user_id and b.device_id == device_id:
                self.bindings[i] = replace(b, device_name=device_name)
                return True
        return False

    def delete(self, user_id: str, device_id: str) -> bool:
        before = len(self.bindings)
        self.bindings = [b for b in self.bindings if not (b.user_id == user_id and b.device_id == device_id)]
        return len(self.bindings) < before


class InMemoryUsers:
    def __init__(self, users: Sequence[Employee] = (), devices: Optional[InMemoryDevices] = None):
        self.users: dict[str, Employee] = {u.user_id: u for u in users}
        self.devices = devices or InMemoryDevices()
        self._id = 0

    def get_by_id(self, user_id: str) -> Optional[Employee]:
        return self.users.get(user_id)

    def list_by_name(self, name: str):
        return [u for u in self.users.values() if u.name == name]

    def list_all(self):
        return sorted(self.users.values(), key=lambda u: (u.name, u.user_id))

    def _with_devices(self, u: Employee) -> Employee:
        return replace(u, devices=tuple(b for b in self.devices.bindings if b.user_id == u.user_id))

    def list_with_devices(self):
        return [self._with_devices(u) for u in reversed(list(self.users.values()))]

    def get_with_devices(self, user_id: str) -> Optional[Employee]:
        u = self.users.get(user_id)
        return self._with_devices(u) if u else None

    def create(self, *, name: str, role: Role, part_time=False, work_start_time=None, work_end_time=None) -> Employee:
        self._id += 1
        u = Employee(
            user_id=f"new-{self._id}",
            name=name,
            role=role,
            part_time=part_time,
            work_start_time=work_start_time,
            work_end_time=work_end_time,
        )
        self.users[u.user_id] = u
        return u

    def update(self, user_id: str, *, name, part_time, work_start_time, work_end_time) -> Optional[Employee]:
        if user_id not in self.users:
            return None
        u = replace(
            self.users[user_id],
            name=name,
            part_time=part_time,
            work_start_time=work_start_time,
            work_end_time=work_end_time,
        )
        self.users[user_id] = u
        return u

    def delete_by_id(self, user_id: str) -> bool:
        return self.users.pop(user_id, None) is not None


class InMemoryGeofences:
    """Keeps insertion order as creation order."""

    def __init__(self, fences: Sequence[Geofence] = ()):
        self.fences: list[Geofence] = list(fences)

    def list_all(self):
        return list(reversed(self.fences))

    def list_active(self):
        return [f for f in self.fences if f.active]

    def get_by_id(self, geofence_id: str) -> Optional[Geofence]:
        return next((f for f in self.fences if f.geofence_id == geofence_id), None)

    def create(self, *, name: str, latitude: float, longitude: float, radius_meters: float) -> Geofence:
        fence = Geofence(
            geofence_id=f"g{len(self.fences) + 1}",
            name=name,
            center=GeoPoint(latitude, longitude),
            radius_meters=radius_meters,
        )
        self.fences.append(fence)
        return fence

    def set_active(self, geofence_id: str, *, active: bool) -> Optional[Geofence]:
        for i, f in enumerate(self.fences):
            if f.geofence_id == geofence_id:
                self.fences[i] = replace(f, active=active)
                return self.fences[i]
        return None

    def delete_by_id(self, geofence_id: str) -> bool:
        before = len(self.fences)
        self.fences = [f for f in self.fences if f.geofence_id != geofence_id]
        return len(self.fences) < before


class InMemoryRecords:
    def __init__(
        self,
        events: Sequence[AttendanceEvent] = (),
        users: Optional[InMemoryUsers] = None,
        geofences: Optional[InMemoryGeofences] = None,
    ):
        self.events: list[AttendanceEvent] = list(events)
        self.declared_types: dict[str, Optional[RecordType]] = {}
        self.users = users or InMemoryUsers()
        self.geofences = geofences or InMemoryGeofences()
        self.last_list_args: Optional[dict] = None

    def create(self, *, user_id, device_id, timestamp, location, geofence_id=None, ip=None, declared_type=None):
        ev = AttendanceEvent(
            record_id=f"r{len(self.events) + 1}",
            user_id=user_id,
            device_id=device_id,
            timestamp=timestamp,
            location=location,
            geofence_id=geofence_id,
            ip=ip,
        )
        self.events.append(ev)
        self.declared_types[ev.record_id] = declared_type
        return ev

    def get_by_id(self, record_id: str) -> Optional[AttendanceEvent]:
        return next((e for e in self.events if e.record_id == record_id), None)

    def list_rows(self, *, start=None, end=None, user_id=None):
        self.last_list_args = {"start": start, "end": end, "user_id": user_id}
        items = [
            e
            for e in self.events
            if (start is None or e.timestamp >= start)
            and (end is None or e.timestamp < end)
            and (user_id is None or e.user_id == user_id)
        ]
        items.sort(key=lambda e: (e.timestamp, e.record_id), reverse=True)
        rows = []
        for e in items:
            user = self.users.get_by_id(e.user_id)
            fence = self.geofences.get_by_id(e.geofence_id) if e.geofence_id else None
            rows.append(RecordRow(event=e, user_name=user.name if user else None, geofence_name=fence.name if fence else None))
        return rows

    def delete_by_id(self, record_id: str) -> bool:
        before = len(self.events)
        self.events = [e for e in self.events if e.record_id != record_id]
        return len(self.events) < before

    def delete_many(self, record_ids) -> int:
        wanted = set(record_ids)
        before = len(self.events)
        self.events = [e for e in self.events if e.record_id not in wanted]
        return before - len(self.events)


def make_event(record_id: str, user_id: str, ts: datetime, *, device_id: str = "dev-1") -> AttendanceEvent:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return AttendanceEvent(
        record_id=record_id,
        user_id=user_id,
        device_id=device_id,
        timestamp=ts,
        location=DeviceLocation(point=GeoPoint(-23.55, -46.63), accuracy=10.0),
    )


def make_employee(user_id: str, name: str, *, start: Optional[time] = None, end: Optional[time] = None) -> Employee:
    return Employee(user_id=user_id, name=name, role=Role.EMPLOYEE, work_start_time=start, work_end_time=end)
