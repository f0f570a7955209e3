"""Client-side records.

These mirror the API's JSON with one difference: note colors are lower-case
in memory (``"pink"``) and upper-case on the wire (``"PINK"``).
"""

from datetime import datetime
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class NoteColor(str, Enum):
    YELLOW = "yellow"
    PINK = "pink"
    BLUE = "blue"
    GREEN = "green"


class NoteStatus(str, Enum):
    BACKLOG = "BACKLOG"
    DOING = "DOING"
    DONE = "DONE"


def color_to_api(color) -> str:
    """``pink`` -> ``PINK``"""
    return NoteColor(str(getattr(color, "value", color)).lower()).value.upper()


def color_from_api(color: str) -> NoteColor:
    """``PINK`` -> ``NoteColor.PINK``"""
    return NoteColor(color.lower())


class ClientModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProjectRef(ClientModel):
    id: str
    name: str


class UserRef(ClientModel):
    id: str
    name: str


class Note(ClientModel):
    id: str
    content: str
    color: NoteColor
    status: NoteStatus
    project_id: str
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    project: Optional[ProjectRef] = None
    user: Optional[UserRef] = None

    @field_validator("color", mode="before")
    @classmethod
    def _lower_color(cls, v):
        if isinstance(v, str):
            return color_from_api(v)
        return v


class Project(ClientModel):
    id: str
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    notes: list[Note] = Field(default_factory=list)


class User(ClientModel):
    id: str
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    notes: list[Note] = Field(default_factory=list)


class PaginationResult(ClientModel, Generic[T]):
    data: list[T]
    has_more: bool
    next_cursor: Optional[str] = None


class CreateNoteData(ClientModel):
    content: str
    color: NoteColor = NoteColor.YELLOW
    status: NoteStatus = NoteStatus.BACKLOG
    project_id: str
    user_id: Optional[str] = None


class UpdateNoteData(ClientModel):
    content: Optional[str] = None
    color: Optional[NoteColor] = None
    status: Optional[NoteStatus] = None
    project_id: Optional[str] = None
    user_id: Optional[str] = None
