"""Cursor pagination utilities.

Listings are ordered newest first. A cursor is the id of the last item of the
previous page; it is resolved to that record's ``created_at`` and the next
page only contains strictly older rows. One extra row is fetched to tell
whether another page exists, so no count query is needed.
"""

from typing import Any, Dict, Generic, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel
from sqlalchemy import desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.sql import Select

from app.core.config import settings

T = TypeVar("T")


def parse_limit(raw: Optional[str]) -> int:
    """Turn the ``limit`` query string into a page size.

    Missing values fall back to the configured default; values are clamped to
    ``[1, max_page_limit]``. Callers validate that ``raw`` is all digits.
    """
    if raw is None or raw == "":
        return settings.default_page_limit
    return max(1, min(int(raw), settings.max_page_limit))


class CursorParams(BaseModel):
    """Cursor pagination parameters."""

    limit: int = Field(default_factory=lambda: settings.default_page_limit, ge=1)
    cursor: Optional[UUID] = Field(default=None, description="Id of the last item already seen")


class CursorPage(BaseModel, Generic[T]):
    """Generic cursor page; ``nextCursor`` is only present when ``hasMore`` is true."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    data: list[T]
    has_more: bool
    next_cursor: Optional[UUID] = None

    @model_serializer(mode="wrap")
    def _drop_empty_cursor(self, handler):
        result = handler(self)
        for key in ("next_cursor", "nextCursor"):
            if key in result and result[key] is None:
                del result[key]
        return result


def ordered_newest_first(query: Select, model) -> Select:
    """Apply the listing order shared by every collection endpoint."""
    return query.order_by(desc(model.created_at), desc(model.id))


async def paginate(db: AsyncSession, query: Select, model, params: CursorParams) -> Dict[str, Any]:
    """
    Paginate an ordered SQLAlchemy query by cursor.

    Args:
        db: Database session
        query: Select over ``model``, already filtered and ordered
        model: Mapped class whose ``id``/``created_at`` drive the cursor
        params: Cursor pagination parameters

    Returns:
        Dictionary with ``items``, ``has_more`` and ``next_cursor``
    """

    if params.cursor is not None:
        cursor_stmt = select(model.created_at).where(model.id == params.cursor)
        cursor_date = (await db.execute(cursor_stmt)).scalar_one_or_none()
        # An unknown cursor leaves the listing unbounded
        if cursor_date is not None:
            query = query.where(model.created_at < cursor_date)

    result = await db.execute(query.limit(params.limit + 1))
    rows = list(result.scalars().all())

    has_more = len(rows) > params.limit
    items = rows[: params.limit]

    return {
        "items": items,
        "has_more": has_more,
        "next_cursor": items[-1].id if has_more else None,
    }
