# app/domains/user/controller.py
"""User API controller."""

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
from app.domains.user.service import UserService
from app.schemas.note import NoteResponse
from app.schemas.user import UserCreate, UserFilter, UserResponse, UserUpdate
from app.shared.etag import entity_etag
from app.shared.pagination import CursorPage, CursorParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    conditions: ConditionalHeaders = Depends(get_conditional_headers),
    db: AsyncSession = Depends(get_db),
):
    """Create a new user. A name already in use returns that user."""
    service = UserService(db)
    user = await service.create_user(user_data, if_none_match=conditions.if_none_match)
    return UserResponse.model_validate(user)


@router.get("", response_model=CursorPage[UserResponse])
async def get_users(
    search: Optional[str] = Query(None, description="Case-insensitive name filter"),
    pagination: CursorParams = Depends(get_cursor_params),
    db: AsyncSession = Depends(get_db),
):
    """Get a cursor-paginated list of users."""
    service = UserService(db)
    result = await service.get_users_list(filters=UserFilter(search=search), pagination=pagination)
    return CursorPage[UserResponse](
        data=[UserResponse.model_validate(user) for user in result["items"]],
        has_more=result["has_more"],
        next_cursor=result["next_cursor"],
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    response: Response,
    user_id: UUID = Path(..., description="User ID"),
    db: AsyncSession = Depends(get_db),
):
    """Get a specific user with the notes assigned to it."""
    service = UserService(db)
    user = await service.get_user_by_id(user_id)

    response.headers["ETag"] = entity_etag(user)
    return UserResponse.model_validate(user)


@router.get("/{user_id}/notes", response_model=list[NoteResponse])
async def get_user_notes(
    user_id: UUID = Path(..., description="User ID"),
    db: AsyncSession = Depends(get_db),
):
    """Get all notes assigned to a specific user."""
    service = UserService(db)
    notes = await service.get_user_notes(user_id)
    return [NoteResponse.model_validate(note) for note in notes]


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    response: Response,
    user_id: UUID = Path(..., description="User ID"),
    user_data: UserUpdate = Body(...),
    conditions: ConditionalHeaders = Depends(get_conditional_headers),
    db: AsyncSession = Depends(get_db),
):
    """Rename a user."""
    service = UserService(db)
    user = await service.update_user(user_id, user_data, if_match=conditions.if_match)

    if user.id == user_id:
        response.headers["ETag"] = entity_etag(user)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_user(
    user_id: UUID = Path(..., description="User ID"),
    db: AsyncSession = Depends(get_db),
):
    """Delete a user and the notes assigned to it."""
    service = UserService(db)
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
