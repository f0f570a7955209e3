"""Note schemas for request/response serialization."""

from __future__ import annotations

from uuid import UUID

from pydantic import Field

from models.note import NOTE_CONTENT_MAX_LENGTH, NoteColor, NoteStatus

from .base import BaseModelSchema, BaseSchema, RequestSchema
from .project import ProjectSummary


class NoteCreate(RequestSchema):
    """Schema for creating a new note."""

    content: str = Field(..., min_length=1, max_length=NOTE_CONTENT_MAX_LENGTH)
    color: NoteColor
    status: NoteStatus
    project_id: UUID
    user_id: UUID | None = None


class NoteUpdate(RequestSchema):
    """Schema for updating a note. Only supplied fields are applied."""

    content: str | None = Field(None, min_length=1, max_length=NOTE_CONTENT_MAX_LENGTH)
    color: NoteColor | None = None
    status: NoteStatus | None = None
    project_id: UUID | None = None
    user_id: UUID | None = None


class NoteSummary(BaseModelSchema):
    """Note fields without related records."""

    content: str
    color: NoteColor
    status: NoteStatus
    project_id: UUID
    user_id: UUID | None = None


class NoteResponse(NoteSummary):
    """Schema for note response; ``project`` is present when it was loaded."""

    project: ProjectSummary | None = None


class NoteFilter(BaseSchema):
    """Schema for filtering notes."""

    search: str | None = None
    project_id: UUID | None = None
    status: NoteStatus | None = None
    color: NoteColor | None = None
