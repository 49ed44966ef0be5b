"""Task and TaskComment SQLAlchemy ORM models."""

from typing import Any, Dict

from sqlalchemy import (
    Column, String, Text, Integer, Float, Date, JSON, ForeignKey, Index
)
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, isoformat
from .enums import EnumValueType, Priority, TaskStatus, enum_value
from .user import User


class Task(TimestampMixin, Base):
    """Task ORM model.

    A task may belong to a project, be assigned to a user, and have a parent
    task. Comments are owned by the task and removed with it.
    """
    __tablename__ = 'tasks'

    __table_args__ = (
        Index('idx_task_status', 'status'),
        Index('idx_task_priority', 'priority'),
        Index('idx_task_project', 'project_id'),
        Index('idx_task_assignee', 'assignee_id'),
    )

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(EnumValueType(TaskStatus), nullable=False, default=TaskStatus.NOT_STARTED)
    priority = Column(EnumValueType(Priority), nullable=False, default=Priority.MEDIUM)
    progress = Column(Integer, nullable=False, default=0)
    start_date = Column(Date, nullable=True)
    due_date = Column(Date, nullable=True)
    estimated_hours = Column(Float, nullable=True)
    tags = Column(JSON, nullable=True)
    project_id = Column(String(64), ForeignKey('projects.id', ondelete='SET NULL'), nullable=True)
    assignee_id = Column(String(64), ForeignKey('users.id'), nullable=True)
    created_by = Column(String(64), ForeignKey('users.id'), nullable=False)
    parent_task_id = Column(String(64), ForeignKey('tasks.id', ondelete='SET NULL'), nullable=True)

    assignee = relationship(User, foreign_keys=[assignee_id])
    creator = relationship(User, foreign_keys=[created_by])
    project = relationship('Project')
    parent_task = relationship('Task', remote_side='Task.id', back_populates='subtasks')
    subtasks = relationship('Task', back_populates='parent_task')
    comments = relationship(
        'TaskComment',
        back_populates='task',
        cascade='all, delete-orphan',
        order_by='TaskComment.created_at.desc()',
    )

    def to_dict(self, include_comments: bool = False) -> Dict[str, Any]:
        """Convert the Task to a dictionary for serialization.

        Args:
            include_comments: Embed the task's comments, newest first.
        """
        data = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'status': enum_value(self.status),
            'priority': enum_value(self.priority),
            'progress': self.progress,
            'start_date': isoformat(self.start_date),
            'due_date': isoformat(self.due_date),
            'estimated_hours': self.estimated_hours,
            'tags': self.tags if self.tags else [],
            'project_id': self.project_id,
            'assignee_id': self.assignee_id,
            'assignee': self.assignee.to_summary() if self.assignee else None,
            'created_by': self.created_by,
            'creator': self.creator.to_summary() if self.creator else None,
            'parent_task_id': self.parent_task_id,
            'subtasks': [
                {'id': sub.id, 'title': sub.title, 'status': enum_value(sub.status), 'progress': sub.progress}
                for sub in self.subtasks
            ],
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
        if include_comments:
            data['comments'] = [comment.to_dict() for comment in self.comments]
        return data

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}', status='{enum_value(self.status)}')>"


class TaskComment(TimestampMixin, Base):
    """A comment left on a task."""
    __tablename__ = 'task_comments'

    __table_args__ = (
        Index('idx_task_comment_task', 'task_id'),
    )

    task_id = Column(String(64), ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False)
    content = Column(Text, nullable=False)
    created_by = Column(String(64), ForeignKey('users.id'), nullable=False)

    task = relationship(Task, back_populates='comments')
    creator = relationship(User)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'task_id': self.task_id,
            'content': self.content,
            'created_by': self.created_by,
            'creator': self.creator.to_summary() if self.creator else None,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
