from __future__ import annotations

import io
import re

from flask import Flask, jsonify, send_file

from ..common.http import admin_required, json_body, json_errors
from ..container import Container
from .model import Geofence


def geofence_json(fence: Geofence) -> dict:
    return {
        "id": fence.geofence_id,
        "name": fence.name,
        "latitude": fence.center.latitude,
        "longitude": fence.center.longitude,
        "radius": fence.radius_meters,
        "active": fence.active,
        "created_at": fence.created_at.isoformat() if fence.created_at else None,
    }


def register(app: Flask, container: Container) -> None:
    service = container.geofence_service

    @app.route("/api/geofences", methods=["GET"], endpoint="geofences_list")
    @admin_required
    @json_errors
    def geofences_list():
        return jsonify([geofence_json(f) for f in service.list_all()])

    @app.route("/api/geofences", methods=["POST"], endpoint="geofences_create")
    @admin_required
    @json_errors
    def geofences_create():
        data = json_body()
        fence = service.create(
            name=data.get("name"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            radius=data.get("radius"),
        )
        return jsonify(geofence_json(fence)), 201

    @app.route("/api/geofences/<geofence_id>", methods=["PATCH"], endpoint="geofences_toggle")
    @admin_required
    @json_errors
    def geofences_toggle(geofence_id: str):
        data = json_body()
        return jsonify(geofence_json(service.set_active(geofence_id, active=data.get("active"))))

    @app.route("/api/geofences/<geofence_id>", methods=["DELETE"], endpoint="geofences_delete")
    @admin_required
    @json_errors
    def geofences_delete(geofence_id: str):
        service.delete(geofence_id)
        return jsonify({"success": True})

    @app.route("/api/geofences/<geofence_id>/qr.png", methods=["GET"], endpoint="geofences_qr")
    @admin_required
    @json_errors
    def geofences_qr(geofence_id: str):
        fence, _, png = service.checkin_qr(geofence_id)
        slug = re.sub(r"\s+", "-", fence.name.strip()).lower()
        return send_file(
            io.BytesIO(png),
            mimetype="image/png",
            as_attachment=True,
            download_name=f"qrcode-{slug}.png",
        )
