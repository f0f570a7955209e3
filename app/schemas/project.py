"""Project schemas for request/response serialization."""

from __future__ import annotations

from pydantic import Field, field_validator

from .base import BaseModelSchema, BaseSchema, RequestSchema

PROJECT_NAME_MAX_LENGTH = 100


def _clean_name(v: str | None) -> str | None:
    if v is not None and isinstance(v, str):
        v = v.strip()
        if not v:
            raise ValueError("name should not be empty")
    return v


class ProjectCreate(RequestSchema):
    """Schema for creating a new project."""

    name: str = Field(..., min_length=1, max_length=PROJECT_NAME_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate and clean the project name."""
        return _clean_name(v)


class ProjectUpdate(RequestSchema):
    """Schema for updating a project."""

    name: str | None = Field(None, min_length=1, max_length=PROJECT_NAME_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        """Validate and clean the project name."""
        return _clean_name(v)


class ProjectSummary(BaseModelSchema):
    """Project without its notes, embedded in note responses."""

    name: str


class ProjectResponse(ProjectSummary):
    """Schema for project response."""

    notes: list[NoteSummary] = []


class ProjectFilter(BaseSchema):
    """Schema for filtering projects."""

    search: str | None = None


# Import NoteSummary at the end to avoid circular imports
from .note import NoteSummary  # noqa: E402, I001

# Rebuild the model to resolve forward references
ProjectResponse.model_rebuild()
