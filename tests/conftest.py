"""Pytest configuration and fixtures for testing.

This module provides shared fixtures for database testing using in-memory SQLite
for fast and isolated test execution.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from pm_web_svc.api.app import create_app
from pm_web_svc.database import Database, get_db
from pm_web_svc.models import KanbanBoard, KanbanCard, KanbanColumn, User


@pytest.fixture(scope="function")
def database():
    """Create an in-memory SQLite Database handle with all tables.

    Yields:
        Database instance backed by a single shared connection.
    """
    handle = Database("sqlite:///:memory:")
    handle.create_all()

    yield handle

    handle.dispose()


@pytest.fixture(scope="function")
def db_engine(database):
    """SQLAlchemy Engine of the test database."""
    return database.engine


@pytest.fixture(scope="function")
def db_session(database):
    """Create a database session for testing.

    Yields:
        SQLAlchemy Session instance for database operations.
    """
    session = database.session()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def app(database):
    """FastAPI application serving the test database."""
    return create_app(database)


@pytest.fixture(scope="function")
def client(app, db_session):
    """Create a FastAPI test client with database dependency override.

    Args:
        app: Application fixture.
        db_session: Database session fixture for dependency injection.

    Yields:
        TestClient instance configured with test database session.
    """
    # Override the get_db dependency to use our test session
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def user(db_session: Session) -> User:
    """A persisted user to own records created in tests."""
    record = User(id="u1", name="Ada Lovelace", email="ada@example.com", role="Project Manager")
    db_session.add(record)
    db_session.commit()
    return record


@pytest.fixture
def board(db_session: Session, user: User) -> KanbanBoard:
    """A board with two columns: col-1 holding c1 (1000) and c2 (2000), and an empty col-2."""
    record = KanbanBoard(id="b1", name="Release board", created_by=user.id)
    col_1 = KanbanColumn(id="col-1", name="To Do", order=0)
    col_2 = KanbanColumn(id="col-2", name="In Progress", order=1)
    col_1.cards = [
        KanbanCard(id="c1", title="Write changelog", position=1000.0),
        KanbanCard(id="c2", title="Tag release", position=2000.0),
    ]
    record.columns = [col_1, col_2]

    db_session.add(record)
    db_session.commit()
    return record
