# app/core/dependencies.py
"""Shared FastAPI dependencies."""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Header, Query

from app.database import get_db
from app.shared.pagination import CursorParams, parse_limit

logger = logging.getLogger(__name__)

__all__ = ["ConditionalHeaders", "get_conditional_headers", "get_cursor_params", "get_db"]


@dataclass(frozen=True)
class ConditionalHeaders:
    """Conditional request headers as received."""

    if_match: Optional[str] = None
    if_none_match: Optional[str] = None


async def get_conditional_headers(
    if_match: Optional[str] = Header(None, description="ETag the client last saw"),
    if_none_match: Optional[str] = Header(
        None, description="'*' marks a create as idempotent"
    ),
) -> ConditionalHeaders:
    """Read If-Match / If-None-Match from the request."""
    if if_match or if_none_match:
        logger.debug("Conditional headers: If-Match=%s If-None-Match=%s", if_match, if_none_match)
    return ConditionalHeaders(if_match=if_match, if_none_match=if_none_match)


async def get_cursor_params(
    limit: Optional[str] = Query(
        None, pattern=r"^\d+$", description="Page size, clamped to the configured maximum"
    ),
    cursor: Optional[UUID] = Query(None, description="Id of the last item from the previous page"),
) -> CursorParams:
    """Build cursor pagination parameters from the query string.

    Returns:
        CursorParams: limit parsed and clamped, cursor as given
    """
    return CursorParams(limit=parse_limit(limit), cursor=cursor)
