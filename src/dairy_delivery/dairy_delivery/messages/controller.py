from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.message_service

    @app.route("/api/messages", methods=["GET"], endpoint="list_messages")
    def list_messages():
        logs = service.list_logs(
            month=request.args.get("month"),
            year=request.args.get("year"),
            customer_id=request.args.get("customerId"),
        )
        return jsonify([log.to_dict() for log in logs])

    @app.route("/api/messages/bills", methods=["POST"], endpoint="send_bills")
    def send_bills():
        logs = service.send_bills(request.get_json(silent=True) or {})
        return jsonify([log.to_dict() for log in logs]), 201
