"""Project API controller with FastAPI endpoints."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import (
    ConditionalHeaders,
    get_conditional_headers,
    get_cursor_params,
    get_db,
)
from app.domains.project.service import ProjectService

# Import schemas to ensure model rebuilding happens
import app.schemas  # noqa: F401
from app.schemas.project import ProjectCreate, ProjectFilter, ProjectResponse, ProjectUpdate
from app.shared.etag import entity_etag
from app.shared.pagination import CursorPage, CursorParams

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/projects",
    tags=["projects"],
)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    conditions: ConditionalHeaders = Depends(get_conditional_headers),
    db: AsyncSession = Depends(get_db),
):
    """Create a new project. A name already in use returns that project."""

    service = ProjectService(db)
    project = await service.create_project(
        project_data=project_data, if_none_match=conditions.if_none_match
    )
    return ProjectResponse.model_validate(project)


@router.get("", response_model=CursorPage[ProjectResponse])
async def get_projects(
    search: Optional[str] = Query(None, description="Case-insensitive name filter"),
    pagination: CursorParams = Depends(get_cursor_params),
    db: AsyncSession = Depends(get_db),
):
    """Get a cursor-paginated list of projects, newest first."""

    service = ProjectService(db)
    result = await service.get_projects_list(
        filters=ProjectFilter(search=search), pagination=pagination
    )

    return CursorPage[ProjectResponse](
        data=[ProjectResponse.model_validate(project) for project in result["items"]],
        has_more=result["has_more"],
        next_cursor=result["next_cursor"],
    )


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    response: Response,
    project_id: UUID = Path(..., description="Project ID"),
    db: AsyncSession = Depends(get_db),
):
    """Get a specific project with its notes."""

    service = ProjectService(db)
    project = await service.get_project_by_id(project_id)

    response.headers["ETag"] = entity_etag(project)
    return ProjectResponse.model_validate(project)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    response: Response,
    project_id: UUID = Path(..., description="Project ID"),
    project_data: ProjectUpdate = Body(...),
    conditions: ConditionalHeaders = Depends(get_conditional_headers),
    db: AsyncSession = Depends(get_db),
):
    """Rename a project."""

    service = ProjectService(db)
    project = await service.update_project(project_id, project_data, if_match=conditions.if_match)

    response.headers["ETag"] = entity_etag(project)
    return ProjectResponse.model_validate(project)


@router.delete(
    "/{project_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
)
async def delete_project(
    project_id: UUID = Path(..., description="Project ID"),
    db: AsyncSession = Depends(get_db),
):
    """Delete a project and its notes."""

    service = ProjectService(db)
    await service.delete_project(project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
