from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from .service import AttendanceFilter


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/sheet/<delivery_person_id>/<date>", methods=["GET"], endpoint="attendance_sheet")
    def attendance_sheet(delivery_person_id: str, date: str):
        return jsonify(service.build_sheet(delivery_person_id, date).to_dict())

    @app.route("/api/attendance/check/<delivery_person_id>/<date>", methods=["GET"], endpoint="attendance_check")
    def attendance_check(delivery_person_id: str, date: str):
        existing = service.find_submitted(delivery_person_id, date)
        return jsonify({"exists": existing is not None, "attendance": existing.to_dict() if existing else None})

    @app.route("/api/attendance", methods=["POST"], endpoint="submit_attendance")
    def submit_attendance():
        record = service.submit(request.get_json(silent=True) or {})
        return jsonify({"message": "Attendance saved successfully", "attendance": record.to_dict()}), 201

    @app.route("/api/attendance/history/<delivery_person_id>", methods=["GET"], endpoint="attendance_history")
    def attendance_history(delivery_person_id: str):
        records = service.history(delivery_person_id, AttendanceFilter.from_args(request.args))
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/admin", methods=["GET"], endpoint="attendance_admin")
    def attendance_admin():
        records = service.admin_view(AttendanceFilter.from_args(request.args))
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/<attendance_id>", methods=["GET"], endpoint="get_attendance")
    def get_attendance(attendance_id: str):
        return jsonify(service.get(attendance_id).to_dict())
