"""Pydantic schemas for the pm_web_svc application.

This package contains all Pydantic models for request/response validation
and serialization.
"""

from .common import MessageResponse, SuccessResponse, ErrorResponse
from .user import UserCreate
from .work_item import (
    ProgramCreate, ProgramUpdate, ProjectCreate, ProjectUpdate, WorkItemStatusMove
)
from .task import TaskCreate, TaskUpdate, TaskFilterParams, CommentCreate
from .board_template import BoardTemplateCreate
from .kanban import (
    BoardCreate, BoardUpdate, ColumnCreate, ColumnUpdate, ColumnReorderRequest,
    CardCreate, CardUpdate, CardMove, CardMoveRequest, CardResponse, ReorderResponse
)

__all__ = [
    "MessageResponse", "SuccessResponse", "ErrorResponse",
    "UserCreate",
    "ProgramCreate", "ProgramUpdate", "ProjectCreate", "ProjectUpdate", "WorkItemStatusMove",
    "TaskCreate", "TaskUpdate", "TaskFilterParams", "CommentCreate",
    "BoardTemplateCreate",
    "BoardCreate", "BoardUpdate", "ColumnCreate", "ColumnUpdate", "ColumnReorderRequest",
    "CardCreate", "CardUpdate", "CardMove", "CardMoveRequest", "CardResponse", "ReorderResponse",
]
