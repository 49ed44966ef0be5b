"""Kanban board, column and card SQLAlchemy ORM models.

A board owns an ordered list of columns (by ``order``) and each column owns
an ordered list of cards. Card order within a column is defined by the
numeric ``position`` field; positions are gapped, need not be contiguous,
and ties are broken by ``created_at`` then ``id``.
"""

from typing import Any, Dict

from sqlalchemy import (
    Column, String, Text, Integer, Float, Boolean, Date, JSON, ForeignKey, Index
)
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, isoformat
from .enums import EnumValueType, Priority, enum_value
from .user import User
from .work_item import Project


class KanbanBoard(TimestampMixin, Base):
    """A kanban board, optionally attached to a project."""
    __tablename__ = 'kanban_boards'

    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    project_id = Column(String(64), ForeignKey('projects.id', ondelete='SET NULL'), nullable=True)
    created_by = Column(String(64), ForeignKey('users.id'), nullable=False)
    order = Column(Integer, nullable=False, default=0)

    creator = relationship(User)
    project = relationship(Project)
    columns = relationship(
        'KanbanColumn',
        back_populates='board',
        cascade='all, delete-orphan',
        order_by='KanbanColumn.order',
    )

    def to_dict(self, include_columns: bool = True) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'project_id': self.project_id,
            'project': {'id': self.project.id, 'name': self.project.name} if self.project else None,
            'created_by': self.created_by,
            'creator': self.creator.to_summary() if self.creator else None,
            'order': self.order,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
        if include_columns:
            data['columns'] = [column.to_dict() for column in self.columns]
        return data

    def __repr__(self):
        return f"<KanbanBoard(id={self.id}, name='{self.name}')>"


class KanbanColumn(TimestampMixin, Base):
    """An ordered container of kanban cards."""
    __tablename__ = 'kanban_columns'

    __table_args__ = (
        Index('idx_kanban_column_board', 'board_id'),
    )

    board_id = Column(String(64), ForeignKey('kanban_boards.id', ondelete='CASCADE'), nullable=False)
    name = Column(String, nullable=False)
    color = Column(String, nullable=True)
    order = Column(Integer, nullable=False, default=0)
    max_wip_limit = Column(Integer, nullable=True)
    is_collapsed = Column(Boolean, nullable=False, default=False)

    board = relationship(KanbanBoard, back_populates='columns')
    cards = relationship(
        'KanbanCard',
        back_populates='column',
        cascade='all, delete-orphan',
        order_by=lambda: (KanbanCard.position, KanbanCard.created_at, KanbanCard.id),
    )

    def to_dict(self, include_cards: bool = True) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'board_id': self.board_id,
            'name': self.name,
            'color': self.color,
            'order': self.order,
            'max_wip_limit': self.max_wip_limit,
            'is_collapsed': self.is_collapsed,
        }
        if include_cards:
            data['cards'] = [card.to_dict() for card in self.cards]
        return data

    def __repr__(self):
        return f"<KanbanColumn(id={self.id}, name='{self.name}', order={self.order})>"


class KanbanCard(TimestampMixin, Base):
    """A card placed at a numeric position inside a kanban column."""
    __tablename__ = 'kanban_cards'

    __table_args__ = (
        Index('idx_kanban_card_column_position', 'column_id', 'position'),
    )

    column_id = Column(String(64), ForeignKey('kanban_columns.id', ondelete='CASCADE'), nullable=False)
    position = Column(Float, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    project_id = Column(String(64), ForeignKey('projects.id', ondelete='SET NULL'), nullable=True)
    assignee_id = Column(String(64), ForeignKey('users.id'), nullable=True)
    priority = Column(EnumValueType(Priority), nullable=True)
    due_date = Column(Date, nullable=True)
    labels = Column(JSON, nullable=True)
    cover_color = Column(String, nullable=True)
    cover_image = Column(String, nullable=True)
    checklist = Column(JSON, nullable=True)
    attachments = Column(JSON, nullable=True)
    created_by = Column(String(64), ForeignKey('users.id'), nullable=True)

    column = relationship(KanbanColumn, back_populates='cards')
    assignee = relationship(User, foreign_keys=[assignee_id])
    creator = relationship(User, foreign_keys=[created_by])
    project = relationship(Project)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'column_id': self.column_id,
            'position': self.position,
            'title': self.title,
            'description': self.description,
            'project_id': self.project_id,
            'assignee_id': self.assignee_id,
            'assignee': self.assignee.to_summary() if self.assignee else None,
            'priority': enum_value(self.priority),
            'due_date': isoformat(self.due_date),
            'labels': self.labels if self.labels else [],
            'cover_color': self.cover_color,
            'cover_image': self.cover_image,
            'checklist': self.checklist,
            'attachments': self.attachments,
            'created_by': self.created_by,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<KanbanCard(id={self.id}, column_id={self.column_id}, position={self.position})>"
