from __future__ import annotations

import logging
from typing import Any, Sequence

from ..common.qr_codes import checkin_url, make_qr_png
from ..common.validators import require_latitude, require_longitude, require_non_empty, require_positive
from ..core.exceptions import NotFoundError, ValidationError
from .model import Geofence
from .repository import GeofenceRepository

logger = logging.getLogger(__name__)


class GeofenceService:
    """Use cases: administrar áreas autorizadas e seus QR codes."""

    def __init__(self, geofences: GeofenceRepository, *, public_base_url: str = ""):
        self._geofences = geofences
        self._public_base_url = public_base_url

    def list_all(self) -> Sequence[Geofence]:
        return self._geofences.list_all()

    def get(self, geofence_id: str) -> Geofence:
        fence = self._geofences.get_by_id(geofence_id)
        if not fence:
            raise NotFoundError("Geofence não encontrada")
        return fence

    def create(self, *, name: Any, latitude: Any, longitude: Any, radius: Any) -> Geofence:
        name_s = require_non_empty(name, "Nome")
        lat = require_latitude(latitude)
        lon = require_longitude(longitude)
        radius_m = require_positive(radius, "Raio")

        fence = self._geofences.create(name=name_s, latitude=lat, longitude=lon, radius_meters=radius_m)
        logger.info("Geofence created id=%s name=%r radius=%.1fm", fence.geofence_id, fence.name, fence.radius_meters)
        return fence

    def set_active(self, geofence_id: str, *, active: Any) -> Geofence:
        if not isinstance(active, bool):
            raise ValidationError("Campo 'active' deve ser booleano")
        fence = self._geofences.set_active(geofence_id, active=active)
        if not fence:
            raise NotFoundError("Geofence não encontrada")
        logger.info("Geofence %s active=%s", geofence_id, active)
        return fence

    def delete(self, geofence_id: str) -> None:
        if not self._geofences.delete_by_id(geofence_id):
            raise NotFoundError("Geofence não encontrada")
        logger.info("Geofence %s deleted", geofence_id)

    def checkin_qr(self, geofence_id: str) -> tuple[Geofence, str, bytes]:
        """QR code (PNG) pointing at the check-in page scoped to this fence."""
        fence = self.get(geofence_id)
        url = checkin_url(self._public_base_url, fence.geofence_id)
        return fence, url, make_qr_png(url)
