"""Pydantic schemas for personal kanban boards and columns.

Every write names the acting ``user_id``; a board or column outside that
user's boards is reported as not found.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .common import clean_optional_string, require_text


class UserBoardCreate(BaseModel):
    """Input schema for creating a personal board.

    Without ``template_id`` the board gets Planning / In Progress / Completed
    columns.
    """
    user_id: str = Field(..., description="ID of the owning user (required)")
    name: str = Field(..., description="Board name (required)")
    description: Optional[str] = Field(None, description="Board description")
    template_id: Optional[str] = Field(None, description="Board template to copy columns from")
    settings: Optional[Dict[str, Any]] = Field(None, description="Free-form board settings")

    @field_validator('user_id', 'name')
    @classmethod
    def validate_required_text(cls, v: str, info) -> str:
        return require_text(v, info.field_name)

    @field_validator('description', 'template_id')
    @classmethod
    def clean_optional_strings(cls, v: Optional[str]) -> Optional[str]:
        return clean_optional_string(v)


class UserBoardUpdate(BaseModel):
    user_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None

    @field_validator('user_id')
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        return require_text(v, "user_id")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return require_text(v, "Name")


class UserColumnCreate(BaseModel):
    """Input schema for appending a column to a personal board."""
    board_id: str = Field(..., description="ID of the owning board (required)")
    user_id: str = Field(..., description="ID of the board owner (required)")
    name: str = Field(..., description="Column name (required)")
    color: Optional[str] = Field(None, description="Column color, slate when omitted")
    icon: Optional[str] = Field(None, description="Column icon")
    status_mapping: Optional[str] = Field(None, description="Work item status shown in the column")
    max_wip_limit: Optional[int] = Field(None, ge=0, description="Work-in-progress limit")
    settings: Optional[Dict[str, Any]] = Field(None, description="Free-form column settings")

    @field_validator('board_id', 'user_id', 'name')
    @classmethod
    def validate_required_text(cls, v: str, info) -> str:
        return require_text(v, info.field_name)


class UserColumnChanges(BaseModel):
    """Column fields that can be edited; absent fields are left unchanged."""
    name: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    order: Optional[int] = Field(None, ge=0)
    status_mapping: Optional[str] = None
    max_wip_limit: Optional[int] = Field(None, ge=0)
    is_collapsed: Optional[bool] = None
    settings: Optional[Dict[str, Any]] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return require_text(v, "Name")


class UserColumnUpdate(UserColumnChanges):
    user_id: str

    @field_validator('user_id')
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        return require_text(v, "user_id")


class UserColumnBatchItem(UserColumnChanges):
    id: str = Field(..., description="Column ID")


class UserColumnBatchUpdate(BaseModel):
    """Several column edits applied in one transaction, typically a reorder."""
    user_id: str = Field(..., description="ID of the board owner")
    columns: List[UserColumnBatchItem] = Field(..., description="Columns with their changed fields")

    @field_validator('user_id')
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        return require_text(v, "user_id")
