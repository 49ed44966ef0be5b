"""Pydantic schemas for user operations."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import clean_optional_string, require_text


class UserCreate(BaseModel):
    """Input schema for creating a user."""
    name: str = Field(..., description="Display name (required)")
    email: str = Field(..., description="Unique email address (required)")
    avatar: Optional[str] = Field(None, description="Avatar URL or emoji")
    role: Optional[str] = Field(None, description="Job role, defaults to 'Team Member'")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_text(v, "Name")

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalize email to lowercase and require an '@'."""
        email = require_text(v, "Email").lower()
        if "@" not in email:
            raise ValueError("Email must contain '@'")
        return email

    @field_validator('avatar', 'role')
    @classmethod
    def clean_optional_strings(cls, v: Optional[str]) -> Optional[str]:
        return clean_optional_string(v)
