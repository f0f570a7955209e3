# app/domains/user/service.py
import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from app.core.config import settings
from app.exceptions.base import BadRequestError
from app.exceptions.user import DuplicateUserNameError, UserNotFoundError
from app.schemas.user import UserCreate, UserFilter, UserUpdate
from app.shared.etag import ensure_if_match, is_create_only
from app.shared.pagination import CursorParams, ordered_newest_first, paginate
from models import Note, User

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_user(self, user_data: UserCreate, if_none_match: Optional[str] = None) -> User:
        """Create a new user, or return the existing user with the same name."""
        existing = await self._get_user_by_name(user_data.name)
        if existing:
            logger.info(
                "User name %r already taken by %s, returning it%s",
                user_data.name,
                existing.id,
                " (If-None-Match: *)" if is_create_only(if_none_match) else "",
            )
            return existing

        user = User(name=user_data.name)

        try:
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
            return user
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("Failed to create user %r", user_data.name)
            raise BadRequestError(f"Failed to create user: {str(e)}")

    async def get_users_list(
        self, filters: Optional[UserFilter] = None, pagination: Optional[CursorParams] = None
    ) -> Dict[str, Any]:
        """Get a cursor page of users with their notes, newest first."""
        query = select(User).options(selectinload(User.notes).selectinload(Note.project))

        if filters and filters.search:
            query = query.where(User.name.ilike(f"%{filters.search}%"))

        query = ordered_newest_first(query, User)

        return await paginate(self.db, query, User, pagination or CursorParams())

    async def get_user_by_id(self, user_id: UUID) -> User:
        """Get a user with its notes and their projects."""
        query = (
            select(User)
            .options(selectinload(User.notes).selectinload(Note.project))
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        user = result.scalar_one_or_none()
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def update_user(
        self, user_id: UUID, user_data: UserUpdate, if_match: Optional[str] = None
    ) -> User:
        """Update user information.

        A rename onto another user's name returns that other user unchanged,
        unless ``strict_duplicate_updates`` turns it into a conflict.
        """
        user = await self.get_user_by_id(user_id)
        ensure_if_match(user, if_match, "User")

        if user_data.name:
            existing = await self._get_user_by_name(user_data.name)
            if existing and existing.id != user.id:
                if settings.strict_duplicate_updates:
                    raise DuplicateUserNameError(existing.id)
                logger.warning(
                    "Update of user %s discarded: name collides with user %s", user.id, existing.id
                )
                return await self.get_user_by_id(existing.id)

        try:
            if user_data.name is not None:
                user.name = user_data.name

            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("Failed to update user %s", user_id)
            raise BadRequestError(f"Failed to update user: {str(e)}")

        return await self.get_user_by_id(user_id)

    async def delete_user(self, user_id: UUID) -> None:
        """Delete a user and the notes assigned to it."""
        user = await self.get_user_by_id(user_id)

        try:
            await self.db.delete(user)
            await self.db.commit()
            logger.info("Deleted user %s with %d notes", user_id, len(user.notes))
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("Failed to delete user %s", user_id)
            raise BadRequestError(f"Failed to delete user: {str(e)}")

    async def get_user_notes(self, user_id: UUID) -> List[Note]:
        """Get the notes assigned to a user, each with its project."""
        user = await self.get_user_by_id(user_id)
        return list(user.notes)

    async def _get_user_by_name(self, name: str) -> Optional[User]:
        """Get the oldest user with exactly this name."""
        query = select(User).where(User.name == name).order_by(User.created_at).limit(1)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()
