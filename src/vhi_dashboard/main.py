from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .config import get_settings_module
from .core.constants import DEFAULT_SESSION_DAYS
from .common.web import register_error_handlers
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_admin, list_tables

from .container import Container, build_container
from .activities.controller import register as register_activities
from .bold_minds.controller import register as register_bold_minds
from .cam_status.controller import register as register_cam_status
from .holidays.controller import register as register_calendar
from .resources.controller import register as register_resources
from .timesheet.controller import register as register_timesheet
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def _bootstrap_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        ensure_demo_admin(db_config)
        logger.info("demo seed ready")


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    Passing ``container`` skips database bootstrap; tests hand in one built on fakes.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PORT"] = int(getattr(settings, "PORT", 3000))
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(days=getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS))
    db_config = getattr(settings, "DB_CONFIG")

    if container is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        _bootstrap_database(settings, db_config)
        container = build_container(db_config=db_config)

    app.extensions["vhi_container"] = container
    container.workspaces.max_age = app.config["PERMANENT_SESSION_LIFETIME"]
    register_error_handlers(app)

    @app.route("/api/test", methods=["GET"], endpoint="api_test")
    def api_test():
        return jsonify({"message": "API is working"})

    register_users(app, container)
    register_resources(app, container)
    register_timesheet(app, container)
    register_activities(app, container)
    register_cam_status(app, container)
    register_bold_minds(app, container)
    register_calendar(app, container)

    return app


def main() -> None:
    app = create_app()
    app.run(host="0.0.0.0", port=int(app.config.get("PORT", 3000)), debug=app.config["DEBUG"])


if __name__ == "__main__":
    main()
