import pytest

from src.ponto_digital.ponto_digital.core.exceptions import NotFoundError, ValidationError
from src.ponto_digital.ponto_digital.geofences.service import GeofenceService
from tests.fakes import InMemoryGeofences


def test_create_validates_coordinates_and_radius():
    svc = GeofenceService(InMemoryGeofences())

    with pytest.raises(ValidationError):
        svc.create(name="Sede", latitude=91, longitude=0, radius=100)
    with pytest.raises(ValidationError):
        svc.create(name="Sede", latitude=0, longitude=0, radius=0)
    with pytest.raises(ValidationError):
        svc.create(name="  ", latitude=0, longitude=0, radius=10)

    fence = svc.create(name=" Sede ", latitude="-23.5", longitude=-46.6, radius="150")
    assert fence.name == "Sede"
    assert fence.radius_meters == 150.0
    assert fence.active is True


def test_toggle_and_delete():
    repo = InMemoryGeofences()
    svc = GeofenceService(repo)
    fence = svc.create(name="Sede", latitude=0, longitude=0, radius=10)

    assert svc.set_active(fence.geofence_id, active=False).active is False
    with pytest.raises(ValidationError):
        svc.set_active(fence.geofence_id, active="no")
    with pytest.raises(NotFoundError):
        svc.set_active("missing", active=True)

    svc.delete(fence.geofence_id)
    assert repo.fences == []
    with pytest.raises(NotFoundError):
        svc.delete(fence.geofence_id)


def test_checkin_qr_points_to_scoped_clock_page():
    svc = GeofenceService(InMemoryGeofences(), public_base_url="https://ponto.example.com/")
    fence = svc.create(name="Sede", latitude=0, longitude=0, radius=10)

    _, url, png = svc.checkin_qr(fence.geofence_id)

    assert url == f"https://ponto.example.com/ponto?geofenceId={fence.geofence_id}"
    assert png.startswith(b"\x89PNG")
