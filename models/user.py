"""
Provides the User model for the application's database schema.

Users are the people notes can be assigned to. There is no authentication;
a user is only a named record.

Relationships
-------------
notes : sqlalchemy.orm.relationship
    Notes assigned to the user. Removing a user removes the notes assigned
    to it, mirroring the ``ON DELETE CASCADE`` foreign key.
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from .base import BaseModel


class User(BaseModel):
    """
    Represents a user entity in the application.

    :ivar name: Display name. Treated as unique by the service layer.
    :type name: str
    """

    __tablename__ = "users"

    name = Column(String(100), nullable=False, index=True)

    # Relationships
    notes = relationship("Note", back_populates="user", cascade="all, delete", passive_deletes=True)
