from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Geofence


class GeofenceRepository(Protocol):
    """Repository interface for geofences.

    ``list_active`` must return fences in creation order: first-match among
    overlapping fences depends on it.
    """

    def list_all(self) -> Sequence[Geofence]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Geofence]:
        raise NotImplementedError

    def get_by_id(self, geofence_id: str) -> Optional[Geofence]:
        raise NotImplementedError

    def create(self, *, name: str, latitude: float, longitude: float, radius_meters: float) -> Geofence:
        raise NotImplementedError

    def set_active(self, geofence_id: str, *, active: bool) -> Optional[Geofence]:
        raise NotImplementedError

    def delete_by_id(self, geofence_id: str) -> bool:
        raise NotImplementedError
