"""
Portfolio API — Migration Tests
=================================

What:  Runs the Alembic migrations against a throwaway SQLite file.
How:   alembic.command drives backend/alembic/env.py exactly as the CLI does;
       the resulting schema is inspected with a plain synchronous engine.

What we test:
    ✅ upgrade head creates the three collections
    ✅ Rows inserted through the ORM get their id from the application
    ✅ downgrade base drops everything again
"""

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, select
from sqlalchemy.orm import Session

from portfolio_api.models.document import Article

SCRIPT_LOCATION = Path(__file__).resolve().parent.parent / "alembic"


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "migrated.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{path}")
    return path


@pytest.fixture
def alembic_config():
    # No ini file: env.py skips fileConfig() and leaves test logging alone
    config = Config()
    config.set_main_option("script_location", str(SCRIPT_LOCATION))
    return config


class TestMigrations:

    def test_upgrade_creates_collections(self, db_path, alembic_config):
        command.upgrade(alembic_config, "head")

        engine = create_engine(f"sqlite:///{db_path}")
        try:
            tables = set(inspect(engine).get_table_names())
            indexes = {index["name"] for index in inspect(engine).get_indexes("articles")}
        finally:
            engine.dispose()

        assert {"articles", "projects", "contacts"} <= tables
        assert "idx_articles_created_at" in indexes

    def test_ids_assigned_without_database_function(self, db_path, alembic_config):
        command.upgrade(alembic_config, "head")

        engine = create_engine(f"sqlite:///{db_path}")
        try:
            with Session(engine) as session:
                session.add(Article(title="First Article", content="Hello", attributes={}))
                session.commit()
                article = session.execute(select(Article)).scalar_one()
                document = article.to_document()
        finally:
            engine.dispose()

        assert document["id"]
        assert document["title"] == "First Article"

    def test_downgrade_drops_collections(self, db_path, alembic_config):
        command.upgrade(alembic_config, "head")
        command.downgrade(alembic_config, "base")

        engine = create_engine(f"sqlite:///{db_path}")
        try:
            tables = set(inspect(engine).get_table_names())
        finally:
            engine.dispose()

        assert not tables & {"articles", "projects", "contacts"}
