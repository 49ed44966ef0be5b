"""Pydantic schemas for kanban board, column and card operations.

Card positions are plain finite numbers. They are compared, never counted,
so gaps between neighbours are expected.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..models.enums import Priority
from .common import clean_optional_string, clean_string_list, require_text


class BoardCreate(BaseModel):
    """Input schema for creating a board.

    Without ``template_id`` the board gets the default To Do / In Progress /
    Review / Done columns.
    """
    name: str = Field(..., description="Board name (required)")
    description: Optional[str] = Field(None, description="Board description")
    project_id: Optional[str] = Field(None, description="ID of the project the board tracks")
    created_by: Optional[str] = Field(None, description="ID of the creating user")
    template_id: Optional[str] = Field(None, description="Board template to copy columns from")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_text(v, "Name")

    @field_validator('description', 'project_id', 'created_by', 'template_id')
    @classmethod
    def clean_optional_strings(cls, v: Optional[str]) -> Optional[str]:
        return clean_optional_string(v)


class BoardUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return require_text(v, "Name")


class ColumnCreate(BaseModel):
    """Input schema for adding a column to a board."""
    board_id: str = Field(..., description="ID of the owning board (required)")
    name: str = Field(..., description="Column name (required)")
    color: Optional[str] = Field(None, description="Column color")
    order: Optional[int] = Field(None, ge=0, description="Column order, appended when omitted")
    max_wip_limit: Optional[int] = Field(None, ge=0, description="Work-in-progress limit")

    @field_validator('board_id', 'name')
    @classmethod
    def validate_required_text(cls, v: str, info) -> str:
        return require_text(v, info.field_name)


class ColumnUpdate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None
    max_wip_limit: Optional[int] = Field(None, ge=0)
    is_collapsed: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return require_text(v, "Name")


class ColumnOrder(BaseModel):
    """New order of one column within its board."""
    id: str = Field(..., description="Column ID")
    order: int = Field(..., ge=0, description="New column order")


class ColumnReorderRequest(BaseModel):
    columns: List[ColumnOrder] = Field(..., description="Columns with their new order")


class CardCreate(BaseModel):
    """Input schema for creating a kanban card.

    When ``position`` is omitted the card is placed after the last card of
    its column.
    """
    title: str = Field(..., description="Card title (required)")
    column_id: str = Field(..., description="ID of the column holding the card (required)")
    position: Optional[float] = Field(None, allow_inf_nan=False, description="Explicit position")
    description: Optional[str] = Field(None, description="Card description")
    project_id: Optional[str] = Field(None, description="ID of the related project")
    assignee_id: Optional[str] = Field(None, description="ID of the assigned user")
    priority: Optional[Priority] = Field(None, description="Card priority")
    due_date: Optional[date] = Field(None, description="Due date")
    labels: List[str] = Field(default_factory=list, description="Card labels")
    cover_color: Optional[str] = Field(None, description="Cover color")
    cover_image: Optional[str] = Field(None, description="Cover image URL")
    created_by: Optional[str] = Field(None, description="ID of the creating user")

    @field_validator('title', 'column_id')
    @classmethod
    def validate_required_text(cls, v: str, info) -> str:
        return require_text(v, info.field_name)

    @field_validator('description', 'project_id', 'assignee_id', 'created_by')
    @classmethod
    def clean_optional_strings(cls, v: Optional[str]) -> Optional[str]:
        return clean_optional_string(v)

    @field_validator('labels', mode='before')
    @classmethod
    def validate_labels(cls, v):
        return clean_string_list(v)


class CardUpdate(BaseModel):
    """Input schema for editing card content.

    Column and position are changed only through the bulk move endpoint.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    assignee_id: Optional[str] = None
    priority: Optional[Priority] = None
    due_date: Optional[date] = None
    labels: Optional[List[str]] = None
    cover_color: Optional[str] = None
    cover_image: Optional[str] = None
    checklist: Optional[List[Dict[str, Any]]] = None
    attachments: Optional[List[Dict[str, Any]]] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return require_text(v, "Title")

    @field_validator('labels', mode='before')
    @classmethod
    def validate_labels(cls, v):
        if v is None:
            return v
        return clean_string_list(v)


class CardMove(BaseModel):
    """Target column and position of one card in a drag-and-drop batch."""
    id: str = Field(..., description="Card ID")
    column_id: str = Field(..., description="Destination column ID")
    position: float = Field(..., allow_inf_nan=False, description="Destination position")


class CardMoveRequest(BaseModel):
    cards: List[CardMove] = Field(..., description="Cards with their new column and position")


class ReorderResponse(BaseModel):
    """Result of an all-or-nothing reorder batch."""
    success: bool = Field(True, description="Whether the batch was committed")
    updated: int = Field(..., description="Number of moves applied")


class CardResponse(BaseModel):
    """Output schema for a kanban card."""
    id: str
    column_id: str
    position: float
    title: str
    description: Optional[str] = None
    project_id: Optional[str] = None
    assignee_id: Optional[str] = None
    assignee: Optional[Dict[str, Any]] = None
    priority: Optional[str] = None
    due_date: Optional[str] = None
    labels: List[str] = Field(default_factory=list)
    cover_color: Optional[str] = None
    cover_image: Optional[str] = None
    checklist: Optional[List[Dict[str, Any]]] = None
    attachments: Optional[List[Dict[str, Any]]] = None
    created_by: Optional[str] = None
    created_at: str
    updated_at: str

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "c1",
                "column_id": "col-1",
                "position": 3000.0,
                "title": "Draft release notes",
                "priority": "high",
                "labels": ["docs"],
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z"
            }
        }
    }
