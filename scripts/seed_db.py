from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from dotenv import load_dotenv

from vhi_dashboard.config import get_settings_module
from vhi_dashboard.database.bootstrap import DEMO_ADMIN_USERNAME, apply_seed_sql, ensure_demo_admin

logger = logging.getLogger("seed_db")


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_admin(db_config)
    logger.info("seeded roster and demo admin %s -> %s", DEMO_ADMIN_USERNAME, db_config.get("database"))


if __name__ == "__main__":
    main()
