"""Pydantic schemas for portfolio, program and project operations.

All three accept the same fields. Projects may additionally reference the
program and portfolio they belong to, and portfolios take the ids of the
projects they group.
"""

from datetime import date
from typing import Optional, List

from pydantic import BaseModel, Field, field_validator, model_validator

from ..models.enums import Methodology, WorkStatus, Priority
from .common import clean_optional_string, clean_string_list, require_text


class WorkItemCreate(BaseModel):
    """Input schema for creating a program or project."""
    name: str = Field(..., description="Name (required)")
    description: Optional[str] = Field(None, description="Detailed description")
    methodology: Methodology = Field(Methodology.AGILE, description="Delivery methodology")
    status: WorkStatus = Field(WorkStatus.ACTIVE, description="Lifecycle status")
    priority: Priority = Field(Priority.MEDIUM, description="Priority level")
    progress: int = Field(0, ge=0, le=100, description="Completion percentage")
    start_date: Optional[date] = Field(None, description="Planned start date")
    due_date: Optional[date] = Field(None, description="Planned end date")
    budget: float = Field(0.0, ge=0.0, description="Allocated budget")
    created_by: str = Field(..., description="ID of the creating user (required)")
    team_member_ids: List[str] = Field(default_factory=list, description="IDs of team members")
    tags: List[str] = Field(default_factory=list, description="Free-form tags")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_text(v, "Name")

    @field_validator('created_by')
    @classmethod
    def validate_created_by(cls, v: str) -> str:
        return require_text(v, "created_by")

    @field_validator('description')
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        return clean_optional_string(v)

    @field_validator('tags', 'team_member_ids', mode='before')
    @classmethod
    def validate_lists(cls, v):
        return clean_string_list(v)

    @model_validator(mode='after')
    def check_dates(self):
        """Reject a due date that falls before the start date."""
        if self.start_date and self.due_date and self.due_date < self.start_date:
            raise ValueError("due_date cannot be before start_date")
        return self


class PortfolioCreate(WorkItemCreate):
    """Input schema for creating a portfolio."""
    project_ids: List[str] = Field(default_factory=list, description="IDs of projects to attach")

    @field_validator('project_ids', mode='before')
    @classmethod
    def validate_project_ids(cls, v):
        return clean_string_list(v)


class ProgramCreate(WorkItemCreate):
    """Input schema for creating a program."""
    pass


class ProjectCreate(WorkItemCreate):
    """Input schema for creating a project."""
    program_id: Optional[str] = Field(None, description="ID of the parent program")
    portfolio_id: Optional[str] = Field(None, description="ID of the owning portfolio")

    @field_validator('program_id', 'portfolio_id')
    @classmethod
    def clean_parent_ids(cls, v: Optional[str]) -> Optional[str]:
        return clean_optional_string(v)


class WorkItemUpdate(BaseModel):
    """Input schema for partial updates; only provided fields are changed."""
    name: Optional[str] = None
    description: Optional[str] = None
    methodology: Optional[Methodology] = None
    status: Optional[WorkStatus] = None
    priority: Optional[Priority] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    budget: Optional[float] = Field(None, ge=0.0)
    team_member_ids: Optional[List[str]] = None
    tags: Optional[List[str]] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return require_text(v, "Name")

    @field_validator('tags', 'team_member_ids', mode='before')
    @classmethod
    def validate_lists(cls, v):
        if v is None:
            return v
        return clean_string_list(v)


class PortfolioUpdate(WorkItemUpdate):
    """Partial update of a portfolio; ``project_ids`` replaces the attached projects."""
    project_ids: Optional[List[str]] = None

    @field_validator('project_ids', mode='before')
    @classmethod
    def validate_project_ids(cls, v):
        if v is None:
            return v
        return clean_string_list(v)


class ProgramUpdate(WorkItemUpdate):
    pass


class ProjectUpdate(WorkItemUpdate):
    program_id: Optional[str] = None
    portfolio_id: Optional[str] = None


class WorkItemStatusMove(BaseModel):
    """Drag-and-drop move of a program or project between status columns."""
    id: str = Field(..., description="ID of the program or project")
    new_status: WorkStatus = Field(..., description="Target status")
    new_progress: Optional[int] = Field(None, ge=0, le=100, description="Optional new progress")
