"""Tests for the Alembic migration chain."""

from __future__ import annotations

from alembic import command
from sqlalchemy import create_engine, inspect

from picvoter.scripts.migrate import build_config


def test_upgrade_creates_images_table(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    command.upgrade(build_config(url), "head")

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        columns = {column["name"] for column in inspector.get_columns("images")}
        assert columns == {
            "id", "filename", "hash", "upvotes", "downvotes", "sorting", "confidence",
        }
        assert "ix_images_sorting" in {index["name"] for index in inspector.get_indexes("images")}
    finally:
        engine.dispose()


def test_downgrade_drops_images_table(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    cfg = build_config(url)
    command.upgrade(cfg, "head")
    command.downgrade(cfg, "base")

    engine = create_engine(url)
    try:
        assert "images" not in inspect(engine).get_table_names()
    finally:
        engine.dispose()
