"""Base models and mixins for SQLModel schemas.

Usage:
    - Database models (table=True) inherit from the composed base classes
    - Paginated list responses use PaginatedResponse[T]

Example:
    class Translation(TranslationBase, TimestampedTable, table=True):
        ...

    class TranslationChange(CreatedTable, table=True):
        ...
"""

import uuid
from datetime import UTC, datetime
from typing import Generic, TypeVar

from sqlmodel import Field, SQLModel

T = TypeVar("T")


def utc_now() -> datetime:
    """Return current UTC datetime. Used as default_factory for fields."""
    return datetime.now(UTC)


class UUIDPrimaryKeyMixin(SQLModel):
    """Standard UUID primary key for all models."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)


class TimestampMixin(SQLModel):
    """Created/updated timestamps."""

    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class CreatedAtMixin(SQLModel):
    """Created timestamp only, for append-only rows."""

    created_at: datetime = Field(default_factory=utc_now, index=True)


class BaseTable(UUIDPrimaryKeyMixin):
    """Base for simple tables (ID only).

    Use for: User
    """

    pass


class TimestampedTable(UUIDPrimaryKeyMixin, TimestampMixin):
    """Base for tables with timestamps.

    Use for: Translation
    """

    pass


class CreatedTable(UUIDPrimaryKeyMixin, CreatedAtMixin):
    """Base for append-only tables.

    Use for: TranslationChange
    """

    pass


class PaginatedResponse(SQLModel, Generic[T]):
    """Standard paginated response wrapper."""

    data: list[T]
    count: int
