"""Base schemas for the application."""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_serializer, model_validator
from pydantic.alias_generators import to_camel
from sqlalchemy import inspect

from models import Base


def _is_mapped(obj) -> bool:
    return isinstance(obj, Base)


class BaseSchema(BaseModel):
    """Base schema class with common configuration.

    Fields are snake_case in Python and camelCase on the wire.
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _skip_unloaded_relationships(cls, data):
        # Reading an unloaded relationship would trigger lazy IO outside the
        # async context, so those fields fall back to their defaults instead.
        if not _is_mapped(data):
            return data
        state = inspect(data)
        relationships = state.mapper.relationships.keys()
        unloaded = state.unloaded
        return {
            name: getattr(data, name)
            for name in cls.model_fields
            if not (name in relationships and name in unloaded) and hasattr(data, name)
        }


class BaseModelSchema(BaseSchema):
    """Base schema for database models."""
    id: UUID
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamp(self, value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class RequestSchema(BaseSchema):
    """Base for request bodies: unknown fields are rejected."""
    model_config = ConfigDict(extra="forbid")
