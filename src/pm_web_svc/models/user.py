"""User SQLAlchemy ORM model."""

from typing import Any, Dict

from sqlalchemy import Column, String

from .base import Base, TimestampMixin, isoformat


class User(TimestampMixin, Base):
    """A person who owns, is assigned to, or comments on work items."""
    __tablename__ = 'users'

    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    avatar = Column(String, nullable=True)
    role = Column(String, nullable=False, default="Team Member")

    def to_summary(self) -> Dict[str, Any]:
        """Compact representation embedded in other records."""
        return {
            'id': self.id,
            'name': self.name,
            'avatar': self.avatar,
            'role': self.role,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'avatar': self.avatar,
            'role': self.role,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
