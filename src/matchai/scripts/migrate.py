# src/matchai/scripts/migrate.py
"""Database bootstrap commands: Alembic upgrade or a direct ``create_all``."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from matchai.core.settings import settings
from matchai.db.session import create_tables

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def alembic_config() -> Config:
    """Alembic config pointed at the repository's migrations folder."""
    cfg = Config(str(MIGRATIONS_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", settings.effective_database_url)
    return cfg


def run_upgrade_head() -> None:
    command.upgrade(alembic_config(), "head")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Prepare the MatchAI database")
    parser.add_argument(
        "--create-all",
        action="store_true",
        help="create tables from the ORM metadata instead of running migrations",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())
    if args.create_all:
        create_tables()
        logger.info("Tables created from ORM metadata")
    else:
        run_upgrade_head()
        logger.info("Database migrated to head")


if __name__ == "__main__":
    main()
