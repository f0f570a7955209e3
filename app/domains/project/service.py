"""Project service layer with business logic."""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from app.exceptions.base import BadRequestError
from app.exceptions.project import DuplicateProjectNameError, ProjectNotFoundError
from app.schemas.project import ProjectCreate, ProjectFilter, ProjectUpdate
from app.shared.etag import ensure_if_match, is_create_only
from app.shared.pagination import CursorParams, ordered_newest_first, paginate
from models.project import Project

logger = logging.getLogger(__name__)


class ProjectService:
    """Service class for project business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_project(
        self, project_data: ProjectCreate, if_none_match: Optional[str] = None
    ) -> Project:
        """Create a new project, or return the existing one with the same name."""

        existing = await self._get_project_by_name(project_data.name)
        if existing:
            logger.info(
                "Project name %r already taken by %s, returning it%s",
                project_data.name,
                existing.id,
                " (If-None-Match: *)" if is_create_only(if_none_match) else "",
            )
            return existing

        project = Project(name=project_data.name)

        try:
            self.db.add(project)
            await self.db.commit()
            await self.db.refresh(project)
            return project
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("Failed to create project %r", project_data.name)
            raise BadRequestError(f"Failed to create project: {str(e)}")

    async def get_projects_list(
        self,
        filters: Optional[ProjectFilter] = None,
        pagination: Optional[CursorParams] = None,
    ) -> Dict[str, Any]:
        """Get a cursor page of projects, newest first, each with its notes."""

        stmt = select(Project).options(selectinload(Project.notes))

        if filters and filters.search:
            stmt = stmt.where(Project.name.ilike(f"%{filters.search}%"))

        stmt = ordered_newest_first(stmt, Project)

        return await paginate(self.db, stmt, Project, pagination or CursorParams())

    async def get_project_by_id(self, project_id: UUID) -> Project:
        """Get a project with its notes; raises when it does not exist."""

        stmt = (
            select(Project)
            .options(selectinload(Project.notes))
            .where(Project.id == project_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        project = result.scalar_one_or_none()
        if not project:
            raise ProjectNotFoundError(project_id)
        return project

    async def update_project(
        self,
        project_id: UUID,
        project_data: ProjectUpdate,
        if_match: Optional[str] = None,
    ) -> Project:
        """Update a project. Renaming onto another project's name is a conflict."""

        project = await self.get_project_by_id(project_id)
        ensure_if_match(project, if_match, "Project")

        if project_data.name:
            existing = await self._get_project_by_name(project_data.name)
            if existing and existing.id != project.id:
                logger.info("Rename of project %s collides with %s", project.id, existing.id)
                raise DuplicateProjectNameError(existing.id)

        # Update fields
        update_data = project_data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(project, field, value)

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("Failed to update project %s", project_id)
            raise BadRequestError(f"Failed to update project: {str(e)}")

        return await self.get_project_by_id(project_id)

    async def delete_project(self, project_id: UUID) -> None:
        """Delete a project; its notes go with it."""

        project = await self.get_project_by_id(project_id)

        try:
            await self.db.delete(project)
            await self.db.commit()
            logger.info("Deleted project %s with %d notes", project_id, len(project.notes))
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("Failed to delete project %s", project_id)
            raise BadRequestError(f"Failed to delete project: {str(e)}")

    # Private helper methods
    async def _get_project_by_name(self, name: str) -> Optional[Project]:
        """Get the oldest project with exactly this name."""
        stmt = select(Project).where(Project.name == name).order_by(Project.created_at).limit(1)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

