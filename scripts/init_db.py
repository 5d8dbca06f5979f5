"""Create the database (if missing) and apply database/schema.sql.

Usage: python scripts/init_db.py [--seed]
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

from config import get_settings_module

from src.gym_management.gym_management.database.bootstrap import (
    apply_schema,
    apply_seed_sql,
    ensure_demo_accounts,
    list_tables,
)

logger = logging.getLogger("init_db")


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", action="store_true", help="also load seed.sql and the demo accounts")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    if args.seed:
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_accounts(db_config)

    logger.info("schema ready on %s (tables=%d, seeded=%s)", target, len(list_tables(db_config)), args.seed)


if __name__ == "__main__":
    main()
