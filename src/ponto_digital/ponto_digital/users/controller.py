from __future__ import annotations

import io

from flask import Flask, jsonify, send_file

from ..common.http import admin_required, json_body, json_errors
from ..container import Container
from .device_model import DeviceAuthorization
from .model import Employee

# camelCase request keys -> service keyword arguments
_UPDATABLE_FIELDS = {
    "name": "name",
    "partTime": "part_time",
    "workStartTime": "work_start_time",
    "workEndTime": "work_end_time",
}


def device_json(d: DeviceAuthorization) -> dict:
    return {
        "id": d.authorization_id,
        "user_id": d.user_id,
        "device_id": d.device_id,
        "device_name": d.device_name,
        "authorized_at": d.authorized_at.isoformat() if d.authorized_at else None,
    }


def user_json(u: Employee) -> dict:
    return {
        "id": u.user_id,
        "name": u.name,
        "role": u.role.value,
        "part_time": u.part_time,
        "work_start_time": u.work_start_time.strftime("%H:%M") if u.work_start_time else None,
        "work_end_time": u.work_end_time.strftime("%H:%M") if u.work_end_time else None,
        "created_at": u.created_at.isoformat() if u.created_at else None,
        "devices": [device_json(d) for d in u.devices],
    }


def register(app: Flask, container: Container) -> None:
    users = container.user_service
    bindings = container.device_binding_service

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @admin_required
    @json_errors
    def users_list():
        return jsonify([user_json(u) for u in users.list_with_devices()])

    @app.route("/api/users/<user_id>", methods=["GET"], endpoint="users_get")
    @admin_required
    @json_errors
    def users_get(user_id: str):
        return jsonify(user_json(users.get(user_id)))

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    @admin_required
    @json_errors
    def users_create():
        data = json_body()
        user = users.create(
            name=data.get("name"),
            role=data.get("role"),
            part_time=data.get("partTime", False),
            work_start_time=data.get("workStartTime"),
            work_end_time=data.get("workEndTime"),
        )
        return jsonify(user_json(user)), 201

    @app.route("/api/users/<user_id>", methods=["PUT"], endpoint="users_update")
    @admin_required
    @json_errors
    def users_update(user_id: str):
        data = json_body()
        fields = {kw: data[key] for key, kw in _UPDATABLE_FIELDS.items() if key in data}
        return jsonify(user_json(users.update(user_id, **fields)))

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="users_delete")
    @admin_required
    @json_errors
    def users_delete(user_id: str):
        users.delete(user_id)
        return jsonify({"message": "Usuário excluído com sucesso"})

    @app.route("/api/users/<user_id>/devices/<path:device_id>", methods=["PATCH"], endpoint="users_device_rename")
    @admin_required
    @json_errors
    def users_device_rename(user_id: str, device_id: str):
        data = json_body()
        return jsonify(user_json(users.rename_device(user_id, device_id, device_name=data.get("deviceName"))))

    @app.route("/api/users/<user_id>/devices/<path:device_id>", methods=["DELETE"], endpoint="users_device_remove")
    @admin_required
    @json_errors
    def users_device_remove(user_id: str, device_id: str):
        return jsonify(user_json(users.remove_device(user_id, device_id)))

    @app.route("/api/users/<user_id>/qr.png", methods=["GET"], endpoint="users_binding_qr")
    @admin_required
    @json_errors
    def users_binding_qr(user_id: str):
        _, _, png = users.binding_qr(user_id)
        return send_file(io.BytesIO(png), mimetype="image/png")

    @app.route("/api/device-bind", methods=["POST"], endpoint="device_bind")
    @json_errors
    def device_bind():
        data = json_body()
        created = bindings.bind(
            user_id=data.get("userId"),
            device_id=data.get("deviceId"),
            device_name=data.get("deviceName"),
        )
        message = "Dispositivo vinculado com sucesso" if created else "Dispositivo já vinculado"
        return jsonify({"message": message})
