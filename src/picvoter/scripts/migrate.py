# src/picvoter/scripts/migrate.py
from __future__ import annotations

import os

from alembic import command
from alembic.config import Config

from picvoter.core.settings import Settings

MIGRATIONS_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations")
)


def build_config(database_url: str) -> Config:
    """Return an Alembic config pointed at the bundled migrations."""
    cfg = Config(os.path.join(MIGRATIONS_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", MIGRATIONS_DIR)
    cfg.set_main_option("sqlalchemy.url", database_url)
    return cfg


def run_upgrade_head() -> None:
    command.upgrade(build_config(Settings().database_url), "head")


if __name__ == "__main__":
    run_upgrade_head()
