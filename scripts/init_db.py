"""Create the attendance tables on the configured MySQL server.

    APP_ENV=production python scripts/init_db.py [--schema PATH]
"""
from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import mysql.connector
from dotenv import load_dotenv

from config import get_settings_module
from src.training_attendance.training_attendance.core.exceptions import PersistenceError
from src.training_attendance.training_attendance.database.bootstrap import apply_schema, list_tables



def main() -> int:
    parser = argparse.ArgumentParser(description="Apply database/schema.sql")
    parser.add_argument("--env", default=None, help="settings to use instead of APP_ENV")
    parser.add_argument("--schema", type=Path, default=REPO_ROOT / "database" / "schema.sql")
    args = parser.parse_args()

    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = importlib.import_module(get_settings_module(args.env))
    db_config = dict(settings.DB_CONFIG)

    try:
        apply_schema(db_config, schema_path=args.schema)
        tables = list_tables(db_config)
    except (mysql.connector.Error, PersistenceError) as exc:
        logging.getLogger("init_db").error("Schema not applied: %s", exc)
        return 1

    print(f"{db_config.get('database')}: {', '.join(tables) or 'no tables'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
