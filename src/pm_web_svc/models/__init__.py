"""SQLAlchemy ORM models for the pm_web_svc application.

This package contains all database models and the base declarative class.
"""

from .base import Base
from .enums import Methodology, WorkStatus, Priority, TaskStatus
from .user import User
from .work_item import Portfolio, Program, Project
from .task import Task, TaskComment
from .board_template import BoardTemplate
from .kanban import KanbanBoard, KanbanColumn, KanbanCard
from .user_kanban import UserKanbanBoard, UserKanbanColumn

__all__ = [
    "Base",
    "Methodology",
    "WorkStatus",
    "Priority",
    "TaskStatus",
    "User",
    "Portfolio",
    "Program",
    "Project",
    "Task",
    "TaskComment",
    "BoardTemplate",
    "KanbanBoard",
    "KanbanColumn",
    "KanbanCard",
    "UserKanbanBoard",
    "UserKanbanColumn",
]
