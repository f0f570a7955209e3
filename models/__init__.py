"""
Models package initialization.
"""

from .base import Base, BaseModel, utcnow
from .note import NOTE_CONTENT_MAX_LENGTH, Note, NoteColor, NoteStatus
from .project import Project
from .user import User

__all__ = [
    "Base",
    "BaseModel",
    "utcnow",
    "Project",
    "Note",
    "NoteColor",
    "NoteStatus",
    "NOTE_CONTENT_MAX_LENGTH",
    "User",
]
