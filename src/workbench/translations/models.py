from enum import Enum
from typing import Any
import uuid

from pydantic import BaseModel, ConfigDict
from sqlalchemy import UniqueConstraint, event
from sqlmodel import Field, SQLModel

from workbench.core.base_models import TimestampedTable
from workbench.locales.config import normalize_locale


class ApprovalState(str, Enum):
    """Review status of a translation.

    Serialized as the enum value in change diffs. ``coerce`` also accepts
    the legacy nullable-boolean encoding (None / True / False).
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def coerce(cls, value: "ApprovalState | bool | str | None") -> "ApprovalState":
        if value is None:
            return cls.PENDING
        if isinstance(value, bool):
            return cls.APPROVED if value else cls.REJECTED
        return cls(value)


class TranslationBase(SQLModel):
    project_id: uuid.UUID = Field(index=True)
    key: str = Field(min_length=1, max_length=255)
    rfc5646_locale: str = Field(max_length=35, index=True)
    source_copy: str
    copy: str | None = Field(default=None)
    translated: bool = False
    approved: ApprovalState = Field(default=ApprovalState.PENDING, index=True)
    notes: str | None = Field(default=None, max_length=1024)


class Translation(TranslationBase, TimestampedTable, table=True):
    """A project/key/locale scoped piece of translated text."""

    __table_args__ = (
        UniqueConstraint(
            "project_id", "key", "rfc5646_locale", name="uq_translation_locale"
        ),
    )

    translator_id: uuid.UUID | None = Field(
        default=None, foreign_key="user.id", nullable=True, ondelete="SET NULL"
    )
    reviewer_id: uuid.UUID | None = Field(
        default=None, foreign_key="user.id", nullable=True, ondelete="SET NULL"
    )
    modifier_id: uuid.UUID | None = Field(
        default=None, foreign_key="user.id", nullable=True, ondelete="SET NULL"
    )


@event.listens_for(Translation, "before_insert")
@event.listens_for(Translation, "before_update")
def _normalize_locale(mapper: Any, connection: Any, target: Translation) -> None:
    target.rfc5646_locale = normalize_locale(target.rfc5646_locale)


class TranslationSnapshot(BaseModel):
    """Field values of a translation captured immediately before a mutation.

    Must be taken before any attribute is assigned; the change recorder
    compares against it instead of the ORM's attribute history.
    """

    model_config = ConfigDict(frozen=True)

    copy: str | None = Field()
    approved: ApprovalState
    translated: bool

    @classmethod
    def capture(cls, translation: Translation) -> "TranslationSnapshot":
        return cls(
            copy=translation.copy,
            approved=translation.approved,
            translated=translation.translated,
        )


class FuzzyMatch(BaseModel):
    """A near-duplicate translation suggested to a translator."""

    source_copy: str
    copy: str = Field()
    match_percentage: int
