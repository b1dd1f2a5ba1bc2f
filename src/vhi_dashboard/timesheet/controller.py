from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.validators import require_non_empty
from ..common.web import json_body, menu_required, ok, read_or_empty
from ..core.enums import Menu
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.timesheet_service

    def _board():
        return container.workspaces.for_session(session).timesheet

    @app.route("/api/timesheet", methods=["GET"], endpoint="timesheet_list")
    @menu_required(Menu.TIMESHEET)
    def timesheet_list():
        filters = service.parse_filter(request.args)
        entries = read_or_empty(lambda: service.list(filters), [], "timesheet")
        return jsonify([e.as_dict() for e in entries])

    @app.route("/api/timesheet", methods=["POST"], endpoint="timesheet_create")
    @menu_required(Menu.TIMESHEET)
    def timesheet_create():
        entry = service.save(json_body())
        return ok("Timesheet saved successfully", 201, id=entry.id)

    @app.route("/api/timesheet/<int:entry_id>", methods=["PUT"], endpoint="timesheet_update")
    @menu_required(Menu.TIMESHEET)
    def timesheet_update(entry_id: int):
        service.update(entry_id, json_body())
        return ok("Timesheet updated successfully")

    @app.route("/api/timesheet/<int:entry_id>", methods=["DELETE"], endpoint="timesheet_delete")
    @menu_required(Menu.TIMESHEET)
    def timesheet_delete(entry_id: int):
        service.delete(entry_id)
        return ok("Timesheet deleted successfully")

    @app.route("/api/timesheet/weeks", methods=["GET"], endpoint="timesheet_weeks")
    @menu_required(Menu.TIMESHEET)
    def timesheet_weeks():
        return jsonify(service.week_options(request.args.get("year"), request.args.get("month")))

    @app.route("/api/timesheet/board", methods=["GET"], endpoint="timesheet_board")
    @menu_required(Menu.TIMESHEET)
    def timesheet_board():
        args = request.args
        view = service.refresh_board(_board(), args.get("year"), args.get("month"), args.get("week"))
        return jsonify(view.as_dict())

    @app.route("/api/timesheet/board/<emp_id>", methods=["PATCH"], endpoint="timesheet_board_edit")
    @menu_required(Menu.TIMESHEET)
    def timesheet_board_edit(emp_id: str):
        data = json_body()
        field = require_non_empty(data.get("field"), "field")
        row = _board().edit(emp_id, field, data.get("value"))
        return jsonify(row)

    @app.route("/api/timesheet/board/<emp_id>/save", methods=["POST"], endpoint="timesheet_board_save")
    @menu_required(Menu.TIMESHEET)
    def timesheet_board_save(emp_id: str):
        entry = service.save_board_row(_board(), emp_id)
        return ok("Timesheet saved successfully", id=entry.id)

    @app.route("/api/timesheet/board/<emp_id>", methods=["DELETE"], endpoint="timesheet_board_delete")
    @menu_required(Menu.TIMESHEET)
    def timesheet_board_delete(emp_id: str):
        service.delete_board_row(_board(), emp_id)
        return ok("Timesheet deleted successfully")
