from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import json_body, menu_required, ok, read_or_empty
from ..core.enums import Menu
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.cam_status_service

    def _workspace():
        return container.workspaces.for_session(session)

    @app.route("/api/cam-status", methods=["GET"], endpoint="cam_status_list")
    @menu_required(Menu.CAM_STATUS)
    def cam_status_list():
        year, month = request.args.get("year"), request.args.get("month")
        records = read_or_empty(lambda: service.list(year, month), [], "cam status")
        return jsonify([r.as_dict() for r in records])

    @app.route("/api/cam-status", methods=["POST"], endpoint="cam_status_save")
    @menu_required(Menu.CAM_STATUS)
    def cam_status_save():
        ids = service.save_many(json_body().get("entries"))
        return ok("CAM status entries saved successfully", ids=ids)

    @app.route("/api/cam-status/grid", methods=["GET"], endpoint="cam_status_grid")
    @menu_required(Menu.CAM_STATUS)
    def cam_status_grid():
        grid, view = service.open_grid(request.args.get("year"), request.args.get("month"))
        _workspace().cam_grid = grid
        return jsonify(view)

    @app.route("/api/cam-status/grid/toggle", methods=["POST"], endpoint="cam_status_grid_toggle")
    @menu_required(Menu.CAM_STATUS)
    def cam_status_grid_toggle():
        data = json_body()
        result = service.toggle(_workspace().cam_grid, data.get("resource_id"), data.get("date"), data.get("status"))
        return jsonify(result)

    @app.route("/api/cam-status/grid/save", methods=["POST"], endpoint="cam_status_grid_save")
    @menu_required(Menu.CAM_STATUS)
    def cam_status_grid_save():
        ids = service.save_grid(_workspace().cam_grid)
        return ok("CAM status entries saved successfully", ids=ids)
