"""Response schemas and validators shared across endpoints."""

from typing import List, Optional

from pydantic import BaseModel, Field


def clean_optional_string(v: Optional[str]) -> Optional[str]:
    """Strip whitespace from an optional string, converting empty strings to None."""
    if v is None:
        return None
    stripped = v.strip() if isinstance(v, str) else v
    return stripped if stripped else None


def require_text(v: str, field: str) -> str:
    """Strip a required string and reject it when nothing is left."""
    if not v or not v.strip():
        raise ValueError(f"{field} cannot be empty")
    return v.strip()


def clean_string_list(v: Optional[List[str]]) -> List[str]:
    """Strip each entry of a string list and drop empty ones."""
    if v is None:
        return []
    return [item.strip() for item in v if isinstance(item, str) and item.strip()]


class MessageResponse(BaseModel):
    """Response carrying a human readable confirmation."""
    message: str = Field(..., description="Confirmation message")


class SuccessResponse(BaseModel):
    """Response for operations that return no record."""
    success: bool = Field(True, description="Whether the operation succeeded")


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""
    error: str = Field(..., description="Error message")
