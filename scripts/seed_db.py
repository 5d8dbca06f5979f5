"""Load the exercise catalog seed and (re)create the demo accounts.

Demo logins: admin@gym.local / admin1234, instructor@gym.local / instructor123,
student@gym.local / student123.
"""
from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.gym_management.gym_management.database.bootstrap import apply_seed_sql, ensure_demo_accounts

logger = logging.getLogger("seed_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_accounts(db_config)
    logger.info("seeded %s on %s", db_config.get("database"), db_config.get("host"))


if __name__ == "__main__":
    main()
