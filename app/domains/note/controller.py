"""Note API controller with FastAPI endpoints."""

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
from app.domains.note.service import NoteService
from app.schemas.note import NoteCreate, NoteFilter, NoteResponse, NoteUpdate
from app.shared.etag import entity_etag
from app.shared.pagination import CursorPage, CursorParams
from models.note import NoteColor, NoteStatus

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/notes",
    tags=["notes"],
)


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    note_data: NoteCreate,
    conditions: ConditionalHeaders = Depends(get_conditional_headers),
    db: AsyncSession = Depends(get_db),
):
    """Create a new note. The same content in the same project returns the existing note."""
    service = NoteService(db)
    note = await service.create_note(note_data=note_data, if_none_match=conditions.if_none_match)
    return NoteResponse.model_validate(note)


@router.get("", response_model=CursorPage[NoteResponse])
async def get_notes(
    search: Optional[str] = Query(None, description="Case-insensitive content filter"),
    project_id: Optional[UUID] = Query(None, alias="projectId"),
    note_status: Optional[NoteStatus] = Query(None, alias="status"),
    color: Optional[NoteColor] = Query(None),
    pagination: CursorParams = Depends(get_cursor_params),
    db: AsyncSession = Depends(get_db),
):
    """Get a cursor-paginated list of notes with optional filters."""
    filters = NoteFilter(search=search, project_id=project_id, status=note_status, color=color)

    service = NoteService(db)
    result = await service.get_notes_list(filters=filters, pagination=pagination)

    return CursorPage[NoteResponse](
        data=[NoteResponse.model_validate(note) for note in result["items"]],
        has_more=result["has_more"],
        next_cursor=result["next_cursor"],
    )


@router.get("/project/{project_id}", response_model=list[NoteResponse])
async def get_project_notes(
    project_id: UUID = Path(..., description="Project ID"),
    db: AsyncSession = Depends(get_db),
):
    """Get all notes for a specific project."""
    service = NoteService(db)
    notes = await service.get_notes_by_project(project_id)
    return [NoteResponse.model_validate(note) for note in notes]


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    response: Response,
    note_id: UUID = Path(..., description="Note ID"),
    db: AsyncSession = Depends(get_db),
):
    """Get a specific note by ID."""
    service = NoteService(db)
    note = await service.get_note_by_id(note_id)

    response.headers["ETag"] = entity_etag(note)
    return NoteResponse.model_validate(note)


@router.patch("/{note_id}", response_model=NoteResponse)
async def update_note(
    response: Response,
    note_id: UUID = Path(..., description="Note ID"),
    note_data: NoteUpdate = Body(...),
    conditions: ConditionalHeaders = Depends(get_conditional_headers),
    db: AsyncSession = Depends(get_db),
):
    """Update a note."""
    service = NoteService(db)
    note = await service.update_note(note_id, note_data, if_match=conditions.if_match)

    # A discarded update returns another note; its version says nothing about this one
    if note.id == note_id:
        response.headers["ETag"] = entity_etag(note)
    return NoteResponse.model_validate(note)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_note(
    note_id: UUID = Path(..., description="Note ID"),
    db: AsyncSession = Depends(get_db),
):
    """Delete a note."""
    service = NoteService(db)
    await service.delete_note(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
