from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.delivery_service

    @app.route("/api/deliveries", methods=["GET"], endpoint="list_deliveries")
    def list_deliveries():
        records = service.find_records(
            date=request.args.get("date"),
            customer_id=request.args.get("customerId"),
            month=request.args.get("month"),
            year=request.args.get("year"),
        )
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/deliveries", methods=["POST"], endpoint="save_delivery")
    def save_delivery():
        record, created = service.save_record(request.get_json(silent=True) or {})
        return jsonify(record.to_dict()), 201 if created else 200

    @app.route("/api/deliveries/bulk", methods=["POST"], endpoint="bulk_save_deliveries")
    def bulk_save_deliveries():
        count = service.bulk_save(request.get_json(silent=True))
        return jsonify({"message": "Records saved successfully", "count": count})

    @app.route("/api/customers/<customer_id>/history", methods=["GET"], endpoint="customer_history")
    def customer_history(customer_id: str):
        customer, records = service.customer_history(
            customer_id,
            request.args.get("month"),
            request.args.get("year"),
        )
        return jsonify({"customer": customer.to_dict(), "records": [r.to_dict() for r in records]})
