"""
A module defining the ``Note`` ORM model.

A note is a short piece of text pinned to a project. It carries a color used
for visual categorisation and a workflow status that maps onto the columns of
the kanban board. A note may optionally be assigned to a user.

Classes:
    NoteColor: Allowed note colors, upper-case on the wire.
    NoteStatus: Workflow statuses.
    Note: The note entity.
"""

from enum import Enum

from sqlalchemy import Column, ForeignKey, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship

from .base import UUID, BaseModel

NOTE_CONTENT_MAX_LENGTH = 1000


class NoteColor(str, Enum):
    YELLOW = "YELLOW"
    PINK = "PINK"
    BLUE = "BLUE"
    GREEN = "GREEN"


class NoteStatus(str, Enum):
    BACKLOG = "BACKLOG"
    DOING = "DOING"
    DONE = "DONE"


class Note(BaseModel):
    __tablename__ = "notes"

    project_id = Column(
        UUID(), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(UUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)

    content = Column(String(NOTE_CONTENT_MAX_LENGTH), nullable=False)
    color = Column(SAEnum(NoteColor, name="note_color"), nullable=False, default=NoteColor.YELLOW)
    status = Column(
        SAEnum(NoteStatus, name="note_status"), nullable=False, default=NoteStatus.BACKLOG
    )

    # Relationships
    project = relationship("Project", back_populates="notes")
    user = relationship("User", back_populates="notes")
