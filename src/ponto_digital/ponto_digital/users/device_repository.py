from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .device_model import DeviceAuthorization


class DeviceRepository(Protocol):
    def list_by_device_id(self, device_id: str) -> Sequence[DeviceAuthorization]:
        raise NotImplementedError

    def get_for_user(self, user_id: str, device_id: str) -> Optional[DeviceAuthorization]:
        raise NotImplementedError

    def create(self, *, user_id: str, device_id: str, device_name: Optional[str] = None) -> DeviceAuthorization:
        raise NotImplementedError

    def rename(self, user_id: str, device_id: str, *, device_name: str) -> bool:
        raise NotImplementedError

    def delete(self, user_id: str, device_id: str) -> bool:
        raise NotImplementedError
