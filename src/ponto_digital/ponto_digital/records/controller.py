from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_utc
from ..common.http import admin_required, client_ip, json_body, json_errors, query_date
from ..container import Container
from ..core.exceptions import ValidationError
from .model import RecordRow


def record_json(row: RecordRow) -> dict:
    ev = row.event
    return {
        "id": ev.record_id,
        "user_id": ev.user_id,
        "device_id": ev.device_id,
        "timestamp": ev.timestamp.isoformat(),
        "geofence_id": ev.geofence_id,
        "location": {
            "lat": ev.location.point.latitude,
            "lon": ev.location.point.longitude,
            "accuracy": ev.location.accuracy,
        },
        "ip": ev.ip,
        "users": {"name": row.user_name} if row.user_name else None,
        "geofences": {"name": row.geofence_name} if row.geofence_name else None,
    }


def _uploaded_text() -> str:
    upload = request.files.get("file")
    raw = upload.read() if upload else request.get_data()
    if not raw:
        raise ValidationError("Arquivo vazio ou inválido")
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def register(app: Flask, container: Container) -> None:
    clock = container.clock_service
    records = container.record_service
    tz = container.settings.tz

    @app.route("/api/record", methods=["POST"], endpoint="record_point")
    @json_errors
    def record_point():
        data = json_body()
        result = clock.register_point(
            device_id=data.get("deviceId"),
            location=data.get("location"),
            ip=client_ip(data.get("ip")),
            geofence_id=data.get("geofenceId") or None,
        )
        return jsonify(
            {
                "message": f"Ponto registrado em {result.geofence.name}",
                "user": result.user.name,
                "geofence": result.geofence.name,
                "timestamp": result.event.timestamp.isoformat(),
            }
        )

    @app.route("/api/records", methods=["GET"], endpoint="records_list")
    @admin_required
    @json_errors
    def records_list():
        rows = records.list_rows(
            start=query_date("start"),
            end=query_date("end"),
            user_id=request.args.get("userId"),
        )
        return jsonify([record_json(r) for r in rows])

    @app.route("/api/records/<record_id>", methods=["DELETE"], endpoint="records_delete")
    @admin_required
    @json_errors
    def records_delete(record_id: str):
        records.delete(record_id)
        return jsonify({"success": True})

    @app.route("/api/records/bulk-delete", methods=["POST"], endpoint="records_bulk_delete")
    @admin_required
    @json_errors
    def records_bulk_delete():
        deleted = records.bulk_delete(json_body().get("ids"))
        return jsonify({"success": True, "deleted": deleted})

    @app.route("/api/records/import", methods=["POST"], endpoint="records_import")
    @admin_required
    @json_errors
    def records_import():
        result = records.import_csv(_uploaded_text())
        body = {"imported": result.imported, "total": result.total}
        if result.errors:
            body["errors"] = result.errors
        return jsonify(body)

    @app.route("/api/records/export.csv", methods=["GET"], endpoint="records_export")
    @admin_required
    @json_errors
    def records_export():
        csv_bytes = records.export_csv(
            start=query_date("start"),
            end=query_date("end"),
            user_id=request.args.get("userId"),
        )
        filename = f"registros-ponto-{now_utc().astimezone(tz).strftime('%Y-%m-%d-%H%M%S')}.csv"
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
