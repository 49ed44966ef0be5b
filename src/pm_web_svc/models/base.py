"""Base SQLAlchemy model for the pm_web_svc application.

This module defines the DeclarativeBase that all ORM models inherit from,
together with the id and timestamp columns shared by every table.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, event
from sqlalchemy.orm import DeclarativeBase


def new_id() -> str:
    """Generate an opaque string primary key."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def isoformat(value):
    """Serialize a date/datetime to ISO format, passing None through."""
    return value.isoformat() if value is not None else None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models.

    All database models in the application should inherit from this class.
    """
    pass


class TimestampMixin:
    """Adds a string primary key plus created_at/updated_at columns."""

    id = Column(String(64), primary_key=True, default=new_id)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __init__(self, **kwargs):
        """Initialize with synchronized timestamps and a generated id."""
        now = utcnow()

        if kwargs.get('id') is None:
            kwargs['id'] = new_id()
        if 'created_at' not in kwargs:
            kwargs['created_at'] = now
        if 'updated_at' not in kwargs:
            kwargs['updated_at'] = now

        super().__init__(**kwargs)


@event.listens_for(TimestampMixin, 'before_update', propagate=True)
def update_updated_at(mapper, connection, target):
    """Refresh updated_at before updating any timestamped record."""
    target.updated_at = utcnow()
