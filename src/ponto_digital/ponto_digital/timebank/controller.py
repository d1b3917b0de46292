from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import admin_required, json_errors, query_date
from ..container import Container

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    reports = container.time_bank_service

    def _build():
        return reports.build_report(
            start=query_date("start"),
            end=query_date("end"),
            user_id=request.args.get("userId"),
        )

    def _filename(ext: str) -> str:
        start = request.args.get("start") or "inicio"
        end = request.args.get("end") or "hoje"
        return f"banco-de-horas_{start}_{end}.{ext}"

    @app.route("/api/reports/daily", methods=["GET"], endpoint="reports_daily")
    @admin_required
    @json_errors
    def reports_daily():
        return jsonify(_build().daily_rows)

    @app.route("/api/reports/bank", methods=["GET"], endpoint="reports_bank")
    @admin_required
    @json_errors
    def reports_bank():
        return jsonify(_build().bank_rows)

    @app.route("/api/reports/daily.csv", methods=["GET"], endpoint="reports_daily_csv")
    @admin_required
    @json_errors
    def reports_daily_csv():
        return app.response_class(
            reports.export_daily_csv(_build()),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={_filename('csv')}"},
        )

    @app.route("/api/reports/report.xlsx", methods=["GET"], endpoint="reports_xlsx")
    @admin_required
    @json_errors
    def reports_xlsx():
        return app.response_class(
            reports.export_xlsx(_build()),
            mimetype=XLSX_MIMETYPE,
            headers={"Content-Disposition": f"attachment; filename={_filename('xlsx')}"},
        )
