"""Note service layer with business logic."""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from app.core.config import settings
from app.exceptions.base import BadRequestError
from app.exceptions.note import DuplicateNoteError, NoteNotFoundError
from app.exceptions.project import ProjectReferenceError
from app.exceptions.user import UserReferenceError
from app.schemas.note import NoteCreate, NoteFilter, NoteUpdate
from app.shared.etag import ensure_if_match, is_create_only
from app.shared.pagination import CursorParams, ordered_newest_first, paginate
from models.note import Note
from models.project import Project
from models.user import User

logger = logging.getLogger(__name__)


class NoteService:
    """Service class for note business logic.

    ``(content, project_id)`` acts as a soft-unique key: creating the same
    pair twice returns the first note.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_note(self, note_data: NoteCreate, if_none_match: Optional[str] = None) -> Note:
        """Create a new note, or return the existing note with the same content in the project."""

        await self._ensure_project_exists(note_data.project_id)
        if note_data.user_id is not None:
            await self._ensure_user_exists(note_data.user_id)

        existing = await self._get_note_by_content(note_data.content, note_data.project_id)
        if existing:
            logger.info(
                "Note content already present in project %s as %s, returning it%s",
                note_data.project_id,
                existing.id,
                " (If-None-Match: *)" if is_create_only(if_none_match) else "",
            )
            return existing

        note = Note(
            content=note_data.content,
            color=note_data.color,
            status=note_data.status,
            project_id=note_data.project_id,
            user_id=note_data.user_id,
        )

        try:
            self.db.add(note)
            await self.db.commit()
            await self.db.refresh(note)
            return note
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("Failed to create note in project %s", note_data.project_id)
            raise BadRequestError(f"Failed to create note: {str(e)}")

    async def get_notes_list(
        self, filters: Optional[NoteFilter] = None, pagination: Optional[CursorParams] = None
    ) -> Dict[str, Any]:
        """Get a cursor page of notes with their project, newest first."""

        query = select(Note).options(selectinload(Note.project))

        if filters:
            if filters.search:
                query = query.where(Note.content.ilike(f"%{filters.search}%"))

            if filters.project_id:
                query = query.where(Note.project_id == filters.project_id)

            if filters.status:
                query = query.where(Note.status == filters.status)

            if filters.color:
                query = query.where(Note.color == filters.color)

        query = ordered_newest_first(query, Note)

        return await paginate(self.db, query, Note, pagination or CursorParams())

    async def get_note_by_id(self, note_id: UUID) -> Note:
        """Get a note with its project; raises when it does not exist."""

        query = (
            select(Note)
            .options(selectinload(Note.project))
            .where(Note.id == note_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        note = result.scalar_one_or_none()
        if not note:
            raise NoteNotFoundError(note_id)
        return note

    async def update_note(
        self, note_id: UUID, note_data: NoteUpdate, if_match: Optional[str] = None
    ) -> Note:
        """Apply a partial update to a note.

        When the new content already exists on another note of the target
        project, that other note is returned and nothing is changed (or a
        conflict is raised when ``strict_duplicate_updates`` is on).
        """

        note = await self.get_note_by_id(note_id)
        ensure_if_match(note, if_match, "Note")

        update_data = note_data.model_dump(exclude_unset=True)

        new_project_id = update_data.get("project_id")
        if new_project_id is None:
            update_data.pop("project_id", None)
        elif new_project_id != note.project_id:
            await self._ensure_project_exists(new_project_id)

        if update_data.get("user_id") is not None:
            await self._ensure_user_exists(update_data["user_id"])

        for field in ("content", "color", "status"):
            if field in update_data and update_data[field] is None:
                del update_data[field]

        if "content" in update_data:
            project_to_check = update_data.get("project_id", note.project_id)
            existing = await self._get_note_by_content(update_data["content"], project_to_check)
            if existing and existing.id != note.id:
                if settings.strict_duplicate_updates:
                    raise DuplicateNoteError(existing.id)
                logger.warning(
                    "Update of note %s discarded: content collides with note %s",
                    note.id,
                    existing.id,
                )
                return await self.get_note_by_id(existing.id)

        for field, value in update_data.items():
            setattr(note, field, value)

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("Failed to update note %s", note_id)
            raise BadRequestError(f"Failed to update note: {str(e)}")

        return await self.get_note_by_id(note_id)

    async def delete_note(self, note_id: UUID) -> None:
        """Delete a note."""

        note = await self.get_note_by_id(note_id)

        try:
            await self.db.delete(note)
            await self.db.commit()
            logger.info("Deleted note %s", note_id)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("Failed to delete note %s", note_id)
            raise BadRequestError(f"Failed to delete note: {str(e)}")

    async def get_notes_by_project(self, project_id: UUID) -> List[Note]:
        """Get every note of a project, newest first."""

        await self._ensure_project_exists(project_id)

        query = ordered_newest_first(select(Note).where(Note.project_id == project_id), Note)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    # Private helper methods
    async def _ensure_project_exists(self, project_id: UUID) -> None:
        result = await self.db.execute(select(Project.id).where(Project.id == project_id))
        if result.scalar_one_or_none() is None:
            raise ProjectReferenceError(project_id)

    async def _ensure_user_exists(self, user_id: UUID) -> None:
        result = await self.db.execute(select(User.id).where(User.id == user_id))
        if result.scalar_one_or_none() is None:
            raise UserReferenceError(user_id)

    async def _get_note_by_content(self, content: str, project_id: UUID) -> Optional[Note]:
        """Get the oldest note with exactly this content in a project."""
        query = (
            select(Note)
            .where(and_(Note.content == content, Note.project_id == project_id))
            .order_by(Note.created_at)
            .limit(1)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()
