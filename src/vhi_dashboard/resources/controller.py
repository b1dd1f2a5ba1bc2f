from __future__ import annotations

from flask import Flask, jsonify

from ..common.validators import require_non_empty
from ..common.web import admin_required, json_body, login_required, ok, read_or_empty
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/resources", methods=["GET"], endpoint="resources_list")
    @login_required
    def resources_list():
        data = read_or_empty(
            container.resource_service.list_with_columns,
            {"resources": [], "columns": []},
            "resources",
        )
        return jsonify(data)

    @app.route("/api/resources", methods=["POST"], endpoint="resources_create")
    @admin_required
    def resources_create():
        data = json_body()
        resource = container.resource_service.create(emp_id=data.get("emp_id"), name=data.get("name"))
        return jsonify(resource.as_dict()), 201

    @app.route("/api/resources/<emp_id>", methods=["PUT"], endpoint="resources_update")
    @admin_required
    def resources_update(emp_id: str):
        data = json_body()
        container.resource_service.rename(emp_id=emp_id, name=data.get("name"))
        return ok("Resource updated successfully")

    @app.route("/api/resources/<int:resource_id>", methods=["DELETE"], endpoint="resources_delete")
    @admin_required
    def resources_delete(resource_id: int):
        container.resource_service.delete(resource_id=resource_id)
        return ok("Resource deleted successfully")

    @app.route("/api/resources/<int:resource_id>/data", methods=["POST"], endpoint="resources_set_value")
    @admin_required
    def resources_set_value(resource_id: int):
        data = json_body()
        container.resource_service.set_value(
            resource_id=resource_id,
            column_name=data.get("column_name"),
            value=data.get("value"),
        )
        return ok("Resource data updated successfully")

    @app.route("/api/columns", methods=["GET"], endpoint="columns_list")
    @login_required
    def columns_list():
        return jsonify(read_or_empty(container.resource_service.list_columns, [], "columns"))

    @app.route("/api/columns", methods=["POST"], endpoint="columns_create")
    @admin_required
    def columns_create():
        name = require_non_empty(json_body().get("name"), "Column name")
        container.resource_service.add_column(name=name)
        return ok("Column added successfully", 201)

    @app.route("/api/columns/<name>", methods=["DELETE"], endpoint="columns_delete")
    @admin_required
    def columns_delete(name: str):
        container.resource_service.delete_column(name=name)
        return ok("Column deleted successfully")
