from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.customer_service

    @app.route("/api/customers", methods=["GET"], endpoint="list_customers")
    def list_customers():
        return jsonify([c.to_dict() for c in service.list_customers()])

    @app.route("/api/customers", methods=["POST"], endpoint="create_customer")
    def create_customer():
        customer = service.create_customer(request.get_json(silent=True) or {})
        return jsonify(customer.to_dict()), 201

    @app.route("/api/customers/<customer_id>", methods=["GET"], endpoint="get_customer")
    def get_customer(customer_id: str):
        return jsonify(service.get_customer(customer_id).to_dict())

    @app.route("/api/customers/<customer_id>", methods=["PUT"], endpoint="update_customer")
    def update_customer(customer_id: str):
        customer = service.update_customer(customer_id, request.get_json(silent=True) or {})
        return jsonify(customer.to_dict())
