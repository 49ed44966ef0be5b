"""Personal kanban board and column SQLAlchemy ORM models.

A personal board belongs to one user and holds an ordered list of columns.
Its columns map onto work item statuses through ``status_mapping`` and hold
no cards of their own.
"""

from typing import Any, Dict

from sqlalchemy import Column, String, Text, Integer, Boolean, JSON, ForeignKey, Index
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, isoformat
from .board_template import BoardTemplate


class UserKanbanBoard(TimestampMixin, Base):
    """A kanban board owned by a single user."""
    __tablename__ = 'user_kanban_boards'

    __table_args__ = (
        Index('idx_user_kanban_board_user', 'user_id'),
    )

    user_id = Column(String(64), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    is_default = Column(Boolean, nullable=False, default=False)
    template_id = Column(String(64), ForeignKey('board_templates.id', ondelete='SET NULL'), nullable=True)
    settings = Column(JSON, nullable=True)

    template = relationship(BoardTemplate)
    columns = relationship(
        'UserKanbanColumn',
        back_populates='board',
        cascade='all, delete-orphan',
        order_by='UserKanbanColumn.order',
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'description': self.description,
            'is_default': self.is_default,
            'template_id': self.template_id,
            'template': {'id': self.template.id, 'name': self.template.name} if self.template else None,
            'settings': self.settings,
            'columns': [column.to_dict() for column in self.columns],
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<UserKanbanBoard(id={self.id}, user_id={self.user_id}, name='{self.name}')>"


class UserKanbanColumn(TimestampMixin, Base):
    """A column of a personal board."""
    __tablename__ = 'user_kanban_columns'

    __table_args__ = (
        Index('idx_user_kanban_column_board', 'board_id'),
    )

    board_id = Column(String(64), ForeignKey('user_kanban_boards.id', ondelete='CASCADE'), nullable=False)
    name = Column(String, nullable=False)
    color = Column(String, nullable=False, default='#64748b')
    icon = Column(String, nullable=True)
    order = Column(Integer, nullable=False, default=0)
    status_mapping = Column(String, nullable=True)
    max_wip_limit = Column(Integer, nullable=True)
    is_collapsed = Column(Boolean, nullable=False, default=False)
    settings = Column(JSON, nullable=True)

    board = relationship(UserKanbanBoard, back_populates='columns')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'board_id': self.board_id,
            'name': self.name,
            'color': self.color,
            'icon': self.icon,
            'order': self.order,
            'status_mapping': self.status_mapping,
            'max_wip_limit': self.max_wip_limit,
            'is_collapsed': self.is_collapsed,
            'settings': self.settings,
        }

    def __repr__(self):
        return f"<UserKanbanColumn(id={self.id}, name='{self.name}', order={self.order})>"
