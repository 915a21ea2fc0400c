from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.member_service

    @app.route("/api/members", methods=["GET"], endpoint="list_members")
    def list_members():
        return jsonify([m.to_dict() for m in service.list_members()])

    @app.route("/api/members", methods=["POST"], endpoint="create_member")
    def create_member():
        member = service.create_member(request.get_json(silent=True) or {})
        return jsonify(member.to_dict()), 201

    @app.route("/api/members/<member_id>", methods=["PUT"], endpoint="update_member")
    def update_member(member_id: str):
        member = service.update_member(member_id, request.get_json(silent=True) or {})
        return jsonify(member.to_dict())
