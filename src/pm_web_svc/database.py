"""Database handle and per-request sessions.

A ``Database`` owns one SQLAlchemy engine and its session factory. The
application creates a handle at startup (see ``api.app.create_app``), keeps it
on ``app.state`` and disposes it at shutdown. Request handlers get a fresh
session from it through the ``get_db`` dependency. PostgreSQL and SQLite URLs
are both supported.
"""

import logging
import os
from typing import Any, Dict, Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Import config to ensure dotenv is loaded
from . import config
from .models.base import Base

logger = logging.getLogger(__name__)

IN_MEMORY_SQLITE_URL = "sqlite:///:memory:"


def get_db_url() -> str:
    """Get database URL from environment variables.

    Returns:
        Database URL string. Defaults to SQLite in-memory if DATABASE_URL is not set.
    """
    return os.getenv("DATABASE_URL", IN_MEMORY_SQLITE_URL)


def engine_options(db_url: str) -> Dict[str, Any]:
    """Keyword arguments for ``create_engine`` appropriate to the URL's backend."""
    if db_url.startswith("postgresql"):
        return {"pool_size": 10, "max_overflow": 20, "pool_timeout": 30, "pool_pre_ping": True}

    options: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if db_url == IN_MEMORY_SQLITE_URL:
        # One shared connection, otherwise every checkout sees an empty database
        options["poolclass"] = StaticPool
    return options


class Database:
    """Process-scoped store handle wrapping an engine and its session factory.

    Args:
        db_url: SQLAlchemy URL. When None, ``get_db_url()`` is used.
    """

    def __init__(self, db_url: str | None = None):
        self.url = db_url if db_url is not None else get_db_url()
        try:
            self.engine: Engine = create_engine(self.url, **engine_options(self.url))
        except Exception as e:
            logger.error(f"Failed to create database engine: {e}", exc_info=True)
            raise
        self.session_factory = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    def session(self) -> Session:
        """Open a new session bound to this database."""
        return self.session_factory()

    def create_all(self) -> None:
        """Create every table known to the ORM metadata."""
        logger.info("Creating database tables")
        Base.metadata.create_all(bind=self.engine)

    def check_connection(self) -> bool:
        """Run ``SELECT 1``; True when the database answers."""
        try:
            with self.session() as db:
                db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database connection check failed: {e}", exc_info=True)
            return False

    def dispose(self) -> None:
        try:
            self.engine.dispose()
        except Exception as e:
            logger.error(f"Error disposing database engine: {e}", exc_info=True)

    def __repr__(self):
        return f"<Database(url='{self.engine.url.render_as_string(hide_password=True)}')>"


def get_database(request: Request) -> Database:
    """Return the Database handle attached to the running application."""
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request.

    The session is closed when the request finishes, whether or not the
    handler raised.
    """
    db = get_database(request).session()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error(f"Database session error: {e}", exc_info=True)
        raise
    finally:
        db.close()
