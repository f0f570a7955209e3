"""ETag helpers.

An entity's ETag is its ``updated_at`` timestamp in epoch milliseconds,
wrapped in double quotes, e.g. ``"1638360000000"``.
"""

import calendar
from datetime import datetime, timezone

from app.core.config import settings
from app.exceptions.base import PreconditionFailedError


def timestamp_ms(value: datetime) -> int:
    """Epoch milliseconds for a datetime; naive values are taken as UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return calendar.timegm(value.utctimetuple()) * 1000 + value.microsecond // 1000


def entity_etag(entity) -> str:
    """Strong ETag for any model carrying ``updated_at``."""
    return f'"{timestamp_ms(entity.updated_at)}"'


def _normalize(tag: str) -> str:
    tag = tag.strip()
    if tag.startswith("W/"):
        tag = tag[2:]
    return tag


def etag_matches(header_value: str | None, current_etag: str) -> bool:
    """Evaluate an ``If-Match`` header against the current ETag.

    An absent header always matches. ``*`` matches any existing entity.
    Weak validators are compared by their opaque part.
    """
    if header_value is None or not header_value.strip():
        return True
    candidates = [_normalize(part) for part in header_value.split(",") if part.strip()]
    if "*" in candidates:
        return True
    return _normalize(current_etag) in candidates


def is_create_only(header_value: str | None) -> bool:
    """True when ``If-None-Match: *`` marks a create as idempotent."""
    return header_value is not None and header_value.strip() == "*"


def ensure_if_match(entity, if_match: str | None, label: str) -> None:
    """Raise 412 when ``If-Match`` no longer matches ``entity``.

    Does nothing when enforcement is switched off in settings.
    """
    if not settings.enforce_if_match:
        return
    current = entity_etag(entity)
    if not etag_matches(if_match, current):
        raise PreconditionFailedError(f"{label} with ID {entity.id} has been modified", etag=current)
