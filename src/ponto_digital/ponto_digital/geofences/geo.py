"""Geofence validation.

Pure functions: no I/O, no state kept between calls. "No match" is a normal
outcome returned as ``None``; translating it into a rejection is the caller's job.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

from ..core.constants import EARTH_RADIUS_METERS
from .model import GeoPoint, Geofence


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points (haversine, spherical earth)."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    dphi = math.radians(b.latitude - a.latitude)
    dlambda = math.radians(b.longitude - a.longitude)

    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_METERS * c


def is_inside(point: GeoPoint, fence: Geofence) -> bool:
    # Boundary is inclusive.
    return distance_meters(point, fence.center) <= fence.radius_meters


def find_matching_fence(
    point: GeoPoint,
    candidates: Iterable[Geofence],
    target_fence_id: Optional[str] = None,
) -> Optional[Geofence]:
    """Return the fence that authorizes ``point``, or ``None``.

    With ``target_fence_id`` (QR-code check-in) only that fence is considered:
    it must be present and active, and there is no fallback to other fences.

    Without it, active fences are scanned in the given order and the first one
    containing the point wins, even when a later overlapping fence has a
    closer center.
    """
    if target_fence_id is not None:
        for fence in candidates:
            if fence.geofence_id == target_fence_id:
                if fence.active and is_inside(point, fence):
                    return fence
                return None
        return None

    for fence in candidates:
        if fence.active and is_inside(point, fence):
            return fence
    return None
