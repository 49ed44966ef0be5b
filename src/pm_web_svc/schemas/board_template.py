"""Pydantic schemas for board template operations."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import clean_optional_string, require_text


class TemplateColumn(BaseModel):
    """One column definition inside a board template."""
    model_config = ConfigDict(extra='allow')

    name: str = Field(..., description="Column name")
    color: Optional[str] = Field(None, description="Column color")
    order: Optional[int] = Field(None, ge=0, description="Column order, defaults to list index")
    max_wip_limit: Optional[int] = Field(None, ge=0, description="Work-in-progress limit")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_text(v, "Column name")


class BoardTemplateCreate(BaseModel):
    """Input schema for creating a board template."""
    name: str = Field(..., description="Template name (required)")
    category: str = Field(..., description="Template category (required)")
    columns: List[TemplateColumn] = Field(..., min_length=1, description="Column definitions (required)")
    created_by: str = Field(..., description="ID of the creating user (required)")
    description: Optional[str] = Field(None, description="Template description")
    methodology: Optional[str] = Field(None, description="Methodology the template targets")
    settings: Optional[Dict[str, Any]] = Field(None, description="Free-form board settings")
    preview_image: Optional[str] = Field(None, description="Preview image URL")
    is_public: bool = Field(False, description="Whether the template is listed publicly")

    @field_validator('name', 'category', 'created_by')
    @classmethod
    def validate_required_text(cls, v: str, info) -> str:
        return require_text(v, info.field_name)

    @field_validator('description', 'methodology', 'preview_image')
    @classmethod
    def clean_optional_strings(cls, v: Optional[str]) -> Optional[str]:
        return clean_optional_string(v)
