from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class GeoPoint:
    """Latitude/longitude in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class DeviceLocation:
    """Position reported by the device, with its accuracy in meters."""

    point: GeoPoint
    accuracy: float = 0.0


@dataclass(frozen=True)
class Geofence:
    """Área circular autorizada para bater ponto."""

    geofence_id: str
    name: str
    center: GeoPoint
    radius_meters: float
    active: bool = True
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if not self.radius_meters > 0:
            raise ValueError(f"radius_meters must be > 0, got {self.radius_meters!r}")
