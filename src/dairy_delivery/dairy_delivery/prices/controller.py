from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.price_service

    @app.route("/api/prices", methods=["GET"], endpoint="list_prices")
    def list_prices():
        return jsonify([p.to_dict() for p in service.list_prices()])

    @app.route("/api/prices/add", methods=["POST"], endpoint="add_price")
    def add_price():
        price = service.add_product(request.get_json(silent=True) or {})
        return jsonify(price.to_dict()), 201

    @app.route("/api/prices/<product>", methods=["DELETE"], endpoint="delete_price")
    def delete_price(product: str):
        service.delete_product(product)
        return jsonify({"message": "Product deleted successfully"})

    @app.route("/api/prices/bulk", methods=["POST"], endpoint="bulk_prices")
    def bulk_prices():
        prices = service.bulk_update(request.get_json(silent=True))
        return jsonify([p.to_dict() for p in prices])
