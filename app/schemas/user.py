"""User-related Pydantic schemas for request/response validation."""

from typing import Optional

from pydantic import Field, field_validator

from .base import BaseModelSchema, BaseSchema, RequestSchema
from .note import NoteResponse

USER_NAME_MAX_LENGTH = 100


class UserCreate(RequestSchema):
    """Schema for creating a user."""

    name: str = Field(..., min_length=1, max_length=USER_NAME_MAX_LENGTH, description="Full name")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that name is not blank."""
        if not v or not v.strip():
            raise ValueError("name should not be empty")
        return v.strip()


class UserUpdate(RequestSchema):
    """Schema for updating user information."""

    name: Optional[str] = Field(None, min_length=1, max_length=USER_NAME_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("name should not be empty")
        return v.strip() if v is not None else v


class UserResponse(BaseModelSchema):
    """Schema for user response data."""

    name: str
    notes: list[NoteResponse] = []


class UserFilter(BaseSchema):
    """Schema for filtering users."""

    search: Optional[str] = None
