from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.ponto_digital.ponto_digital.container import assemble
from src.ponto_digital.ponto_digital.geofences.model import GeoPoint, Geofence
from src.ponto_digital.ponto_digital.main import create_app
from src.ponto_digital.ponto_digital.settings import AppSettings
from src.ponto_digital.ponto_digital.users.device_model import DeviceAuthorization
from tests.fakes import (
    InMemoryDevices,
    InMemoryGeofences,
    InMemoryRecords,
    InMemoryUsers,
    make_employee,
    make_event,
)

ADMIN = {"Authorization": "Bearer test-admin-token"}
SEDE = Geofence(geofence_id="sede", name="Sede", center=GeoPoint(-23.5505, -46.6333), radius_meters=100)


@pytest.fixture()
def repos():
    devices = InMemoryDevices([DeviceAuthorization(authorization_id="d1", user_id="u1", device_id="phone-1")])
    users = InMemoryUsers([make_employee("u1", "Ana"), make_employee("u2", "Bruno")], devices=devices)
    geofences = InMemoryGeofences([SEDE])
    records = InMemoryRecords(users=users, geofences=geofences)
    return users, devices, geofences, records


@pytest.fixture()
def client(monkeypatch, repos):
    monkeypatch.setenv("APP_ENV", "testing")
    users, devices, geofences, records = repos
    container = assemble(
        AppSettings(public_base_url="http://ponto.test"),
        users_repo=users,
        devices_repo=devices,
        geofences_repo=geofences,
        records_repo=records,
    )
    app = create_app(container=container)
    return app.test_client()


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.get_json()["timezone"] == "America/Sao_Paulo"


def test_clock_in_inside_fence(client, repos):
    resp = client.post(
        "/api/record",
        json={"deviceId": "phone-1", "location": {"lat": -23.5505, "lon": -46.6333, "accuracy": 8}},
        headers={"X-Forwarded-For": "200.1.2.3, 10.0.0.1"},
    )

    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Ponto registrado em Sede"
    [ev] = repos[3].events
    assert ev.ip == "200.1.2.3"
    assert ev.geofence_id == "sede"


def test_clock_in_errors_map_to_status_codes(client):
    unknown = client.post("/api/record", json={"deviceId": "x", "location": {"lat": -23.5505, "lon": -46.6333}})
    outside = client.post("/api/record", json={"deviceId": "phone-1", "location": {"lat": -22.9, "lon": -43.2}})
    malformed = client.post("/api/record", json={"deviceId": "phone-1", "location": {"lat": 200, "lon": 0}})
    not_json = client.post("/api/record", data="oops", content_type="text/plain")

    assert unknown.status_code == 401
    assert "Vincule seu dispositivo" in unknown.get_json()["error"]
    assert outside.status_code == 403
    assert malformed.status_code == 400
    assert not_json.status_code == 400


def test_admin_routes_require_token(client):
    assert client.get("/api/records").status_code == 401
    assert client.get("/api/records", headers={"Authorization": "Bearer wrong"}).status_code == 401
    assert client.get("/api/records", headers=ADMIN).status_code == 200


def test_device_bind_then_clock_in(client):
    first = client.post("/api/device-bind", json={"userId": "u2", "deviceId": "phone-2", "deviceName": "Moto"})
    again = client.post("/api/device-bind", json={"userId": "u2", "deviceId": "phone-2"})
    ghost = client.post("/api/device-bind", json={"userId": "ghost", "deviceId": "phone-3"})

    assert first.get_json()["message"] == "Dispositivo vinculado com sucesso"
    assert again.get_json()["message"] == "Dispositivo já vinculado"
    assert ghost.status_code == 404

    taken = client.post("/api/device-bind", json={"userId": "u2", "deviceId": "phone-1"})
    assert taken.status_code == 400

    resp = client.post("/api/record", json={"deviceId": "phone-2", "location": {"lat": -23.5505, "lon": -46.6333}})
    assert resp.get_json()["user"] == "Bruno"


def test_reports_over_http(client, repos):
    records = repos[3]
    records.events.extend(
        [
            make_event("r1", "u1", datetime(2026, 1, 5, 11, 0, tzinfo=timezone.utc)),
            make_event("r2", "u1", datetime(2026, 1, 5, 20, 0, tzinfo=timezone.utc)),
        ]
    )

    daily = client.get("/api/reports/daily?start=2026-01-05&end=2026-01-05", headers=ADMIN)
    bank = client.get("/api/reports/bank", headers=ADMIN)
    bad = client.get("/api/reports/daily?start=05/01/2026", headers=ADMIN)

    assert daily.status_code == 200
    [row] = daily.get_json()
    assert row["worked"] == "9h00min"
    assert row["balance"] == "+1h00min"
    assert bank.get_json()[0]["balance"] == "+1h00min"
    assert bad.status_code == 400


def test_records_export_and_import(client, repos):
    records = repos[3]
    records.events.append(make_event("r1", "u1", datetime(2026, 1, 5, 11, 0, tzinfo=timezone.utc)))

    exported = client.get("/api/records/export.csv", headers=ADMIN)
    assert exported.status_code == 200
    assert "registros-ponto-" in exported.headers["Content-Disposition"]

    imported = client.post("/api/records/import", data=exported.data, headers=ADMIN, content_type="text/csv")
    assert imported.get_json() == {"imported": 1, "total": 1}
    assert len(records.events) == 2


def test_geofence_admin_flow(client):
    created = client.post(
        "/api/geofences",
        json={"name": "Filial", "latitude": -23.56, "longitude": -46.64, "radius": 150},
        headers=ADMIN,
    )
    assert created.status_code == 201
    fence_id = created.get_json()["id"]

    toggled = client.patch(f"/api/geofences/{fence_id}", json={"active": False}, headers=ADMIN)
    assert toggled.get_json()["active"] is False

    qr = client.get(f"/api/geofences/{fence_id}/qr.png", headers=ADMIN)
    assert qr.mimetype == "image/png"

    invalid = client.post(
        "/api/geofences",
        json={"name": "X", "latitude": 0, "longitude": 0, "radius": 0},
        headers=ADMIN,
    )
    assert invalid.status_code == 400
