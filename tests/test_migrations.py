"""Test suite for Alembic migrations to verify upgrade and downgrade functionality.

This module tests that Alembic migrations can be applied and rolled back successfully,
and that the database schema matches the ORM models after application.
"""

from pathlib import Path

import pytest

import alembic.command
import alembic.config
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Inspector

from pm_web_svc.models import Base

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


@pytest.fixture
def db_url(tmp_path):
    """Create a temporary SQLite database file URL for each test."""
    db_file = tmp_path / "alembic_test.sqlite"
    return f"sqlite:///{db_file}"


@pytest.fixture
def alembic_cfg(db_url, monkeypatch):
    """Create Alembic configuration with temporary database URL."""
    # Set DATABASE_URL environment variable so env.py picks it up
    monkeypatch.setenv("DATABASE_URL", db_url)

    return alembic.config.Config(str(ALEMBIC_INI))


def test_upgrade_creates_every_model_table(alembic_cfg, db_url):
    """Every table and column known to the ORM exists after upgrade head."""
    alembic.command.upgrade(alembic_cfg, "head")

    engine = create_engine(db_url)
    try:
        inspector: Inspector = inspect(engine)
        table_names = set(inspector.get_table_names())

        for table in Base.metadata.sorted_tables:
            assert table.name in table_names, f"Table {table.name} missing after upgrade"
            columns = {col['name'] for col in inspector.get_columns(table.name)}
            expected = {col.name for col in table.columns}
            assert expected == columns, f"Column mismatch in {table.name}: {expected ^ columns}"
    finally:
        engine.dispose()


def test_upgrade_creates_indexes(alembic_cfg, db_url):
    alembic.command.upgrade(alembic_cfg, "head")

    engine = create_engine(db_url)
    try:
        inspector: Inspector = inspect(engine)
        card_indexes = {idx['name']: idx for idx in inspector.get_indexes('kanban_cards')}
        assert card_indexes['idx_kanban_card_column_position']['column_names'] == ['column_id', 'position']

        task_indexes = {idx['name'] for idx in inspector.get_indexes('tasks')}
        assert {'idx_task_status', 'idx_task_priority', 'idx_task_project', 'idx_task_assignee'} <= task_indexes

        assert 'id' in inspector.get_pk_constraint('kanban_cards')['constrained_columns']

        assert 'idx_portfolio_status' in {idx['name'] for idx in inspector.get_indexes('portfolios')}
        assert 'idx_user_kanban_column_board' in {idx['name'] for idx in inspector.get_indexes('user_kanban_columns')}
        project_fks = {fk['referred_table'] for fk in inspector.get_foreign_keys('projects')}
        assert {'programs', 'portfolios', 'users'} <= project_fks
    finally:
        engine.dispose()


def test_migrated_schema_accepts_cards(alembic_cfg, db_url):
    """CRUD smoke test using raw SQL against the migrated schema."""
    alembic.command.upgrade(alembic_cfg, "head")

    engine = create_engine(db_url)
    try:
        with engine.connect() as conn:
            conn.execute(text(
                "INSERT INTO kanban_cards (id, column_id, position, title, created_at, updated_at) "
                "VALUES ('c1', 'col-1', 1000.0, 'Card', '2024-01-01 00:00:00', '2024-01-01 00:00:00')"
            ))
            conn.commit()

            row = conn.execute(text("SELECT id, position FROM kanban_cards WHERE id = 'c1'")).fetchone()
            assert row == ('c1', 1000.0)
    finally:
        engine.dispose()


def test_downgrade_removes_tables(alembic_cfg, db_url):
    """alembic downgrade base drops every table."""
    alembic.command.upgrade(alembic_cfg, "head")
    alembic.command.downgrade(alembic_cfg, "base")

    engine = create_engine(db_url)
    try:
        inspector: Inspector = inspect(engine)
        remaining = set(inspector.get_table_names()) - {'alembic_version'}
        assert remaining == set(), f"Tables left after downgrade: {remaining}"
    finally:
        engine.dispose()
