from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import json_body, menu_required, ok, read_or_empty
from ..core.enums import Menu
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.bold_minds_service

    @app.route("/api/bold-minds", methods=["GET"], endpoint="bold_minds_list")
    @menu_required(Menu.BOLD_MINDS)
    def bold_minds_list():
        year = request.args.get("year")
        nominations = read_or_empty(lambda: service.list(year), [], "bold minds")
        return jsonify([n.as_dict() for n in nominations])

    @app.route("/api/bold-minds", methods=["POST"], endpoint="bold_minds_save")
    @menu_required(Menu.BOLD_MINDS)
    def bold_minds_save():
        data = json_body()
        ids = service.save(data.get("nominations"), year=data.get("year"))
        return ok("Bold Minds nominations saved successfully", ids=ids)

    @app.route("/api/bold-minds/roster", methods=["GET"], endpoint="bold_minds_roster")
    @menu_required(Menu.BOLD_MINDS)
    def bold_minds_roster():
        return jsonify(service.roster(request.args.get("year")).as_dict())
