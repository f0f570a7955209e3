# ruff: noqa: F403, F401
"""Schemas package initialization."""

# Import all schemas to ensure they're registered
from .base import *

# Rebuild models to resolve forward references
from .project import *
from .project import ProjectResponse
from .note import *
from .user import *

# Rebuild models after all schemas are loaded
ProjectResponse.model_rebuild()
