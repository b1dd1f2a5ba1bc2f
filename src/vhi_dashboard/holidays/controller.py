from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import menu_required
from ..core.enums import Menu
from ..container import Container
from .holiday_calendar import month_calendar


def register(app: Flask, container: Container) -> None:
    @app.route("/api/calendar", methods=["GET"], endpoint="calendar_month")
    @menu_required(Menu.CALENDAR)
    def calendar_month():
        args = request.args
        return jsonify(month_calendar(args.get("year"), args.get("month"), args.get("location")))
