"""Pydantic schemas for task and task comment operations."""

from datetime import date
from typing import Optional, List

from pydantic import BaseModel, Field, field_validator

from ..models.enums import Priority, TaskStatus
from .common import clean_optional_string, clean_string_list, require_text


class TaskCreate(BaseModel):
    """Input schema for creating a new task.

    Only ``title`` and ``created_by`` are required; status and priority
    default to ``not_started`` and ``medium``.
    """
    title: str = Field(..., description="Task title (required)")
    created_by: str = Field(..., description="ID of the creating user (required)")
    description: Optional[str] = Field(None, description="Detailed task description")
    status: TaskStatus = Field(TaskStatus.NOT_STARTED, description="Task status")
    priority: Priority = Field(Priority.MEDIUM, description="Task priority level")
    progress: int = Field(0, ge=0, le=100, description="Completion percentage")
    start_date: Optional[date] = Field(None, description="Planned start date")
    due_date: Optional[date] = Field(None, description="Task due date")
    estimated_hours: Optional[float] = Field(None, ge=0.0, description="Estimated effort in hours")
    project_id: Optional[str] = Field(None, description="ID of the owning project")
    assignee_id: Optional[str] = Field(None, description="ID of the assigned user")
    parent_task_id: Optional[str] = Field(None, description="ID of the parent task")
    tags: List[str] = Field(default_factory=list, description="List of task tags")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate that title is non-empty after stripping whitespace."""
        return require_text(v, "Title")

    @field_validator('created_by')
    @classmethod
    def validate_created_by(cls, v: str) -> str:
        return require_text(v, "created_by")

    @field_validator('description', 'project_id', 'assignee_id', 'parent_task_id')
    @classmethod
    def clean_optional_strings(cls, v: Optional[str]) -> Optional[str]:
        return clean_optional_string(v)

    @field_validator('tags', mode='before')
    @classmethod
    def validate_tags(cls, v):
        return clean_string_list(v)


class TaskUpdate(BaseModel):
    """Input schema for partial task updates.

    Fields left out of the request body are not touched. Nullable
    references (assignee, project, parent) may be cleared with an explicit
    ``null``.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[Priority] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    estimated_hours: Optional[float] = Field(None, ge=0.0)
    project_id: Optional[str] = None
    assignee_id: Optional[str] = None
    parent_task_id: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return require_text(v, "Title")

    @field_validator('description')
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        return clean_optional_string(v)

    @field_validator('tags', mode='before')
    @classmethod
    def validate_tags(cls, v):
        if v is None:
            return v
        return clean_string_list(v)


class TaskFilterParams(BaseModel):
    """Equality filters for task listing."""
    project_id: Optional[str] = Field(None, description="Filter by project")
    assignee_id: Optional[str] = Field(None, description="Filter by assignee")
    status: Optional[TaskStatus] = Field(None, description="Filter by task status")
    priority: Optional[Priority] = Field(None, description="Filter by task priority")

    @field_validator('project_id', 'assignee_id')
    @classmethod
    def clean_optional_strings(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace from optional string fields, convert empty strings to None."""
        return clean_optional_string(v)


class CommentCreate(BaseModel):
    """Input schema for commenting on a task."""
    content: str = Field(..., description="Comment text (required)")
    created_by: str = Field(..., description="ID of the commenting user (required)")

    @field_validator('content')
    @classmethod
    def validate_content(cls, v: str) -> str:
        return require_text(v, "Content")

    @field_validator('created_by')
    @classmethod
    def validate_created_by(cls, v: str) -> str:
        return require_text(v, "created_by")
