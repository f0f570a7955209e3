"""
Project model grouping notes.
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from .base import BaseModel


class Project(BaseModel):
    """
    Represents a project entity in the application.

    ``name`` is treated as unique by the service layer only; storage does not
    enforce it. Deleting a project deletes its notes.
    """

    __tablename__ = "projects"

    name = Column(String(100), nullable=False, index=True)

    # Relationships
    notes = relationship(
        "Note",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
