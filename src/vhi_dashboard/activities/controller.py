from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import json_body, menu_required, ok, read_or_empty
from ..container import Container
from .service import ActivityService


def _register_kind(app: Flask, service: ActivityService) -> None:
    spec = service.spec
    guard = menu_required(spec.menu)

    def list_view():
        filters = service.parse_filter(request.args)
        records = read_or_empty(lambda: service.list(filters), [], spec.kind)
        return jsonify([r.as_dict() for r in records])

    def create_view():
        record = service.create(json_body())
        return ok(f"{spec.label} added successfully", 201, id=record.id)

    def update_view(record_id: int):
        service.update(record_id, json_body())
        return ok(f"{spec.label} updated successfully")

    def delete_view(record_id: int):
        service.delete(record_id)
        return ok(f"{spec.label} deleted successfully")

    base = f"/api/{spec.kind}"
    app.add_url_rule(base, f"{spec.kind}_list", guard(list_view), methods=["GET"])
    app.add_url_rule(base, f"{spec.kind}_create", guard(create_view), methods=["POST"])
    app.add_url_rule(f"{base}/<int:record_id>", f"{spec.kind}_update", guard(update_view), methods=["PUT"])
    app.add_url_rule(f"{base}/<int:record_id>", f"{spec.kind}_delete", guard(delete_view), methods=["DELETE"])


def register(app: Flask, container: Container) -> None:
    for service in container.activity_services.values():
        _register_kind(app, service)
