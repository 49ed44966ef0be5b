"""Tests for the SQLAlchemy Base model and the shared timestamp columns."""

from datetime import datetime

from sqlalchemy.orm import DeclarativeBase, Session

from pm_web_svc.models import Base, User
from pm_web_svc.models.base import isoformat, new_id


class TestBase:
    """Test cases for the SQLAlchemy Base model."""

    def test_base_is_declarative_base(self):
        """Test that Base is an instance of DeclarativeBase."""
        assert issubclass(Base, DeclarativeBase)

    def test_all_tables_registered(self):
        assert {
            "users", "programs", "projects", "program_team_members", "project_team_members",
            "tasks", "task_comments", "board_templates",
            "kanban_boards", "kanban_columns", "kanban_cards",
        } <= set(Base.metadata.tables)


class TestTimestampMixin:
    """Test cases for generated ids and timestamps."""

    def test_new_records_get_id_and_equal_timestamps(self):
        user = User(name="Ada", email="ada@example.com")

        assert isinstance(user.id, str) and len(user.id) == 36
        assert isinstance(user.created_at, datetime)
        assert user.created_at == user.updated_at

    def test_explicit_id_kept(self):
        assert User(id="u1", name="Ada", email="ada@example.com").id == "u1"

    def test_new_id_unique(self):
        assert new_id() != new_id()

    def test_update_refreshes_updated_at(self, db_session: Session):
        user = User(name="Ada", email="ada@example.com")
        db_session.add(user)
        db_session.commit()
        created_at = user.created_at

        user.role = "Engineer"
        db_session.commit()

        assert user.updated_at > created_at

    def test_isoformat_passes_none(self):
        assert isoformat(None) is None
