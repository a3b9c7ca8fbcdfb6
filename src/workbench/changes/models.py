from datetime import datetime
from typing import Any
import uuid

from sqlalchemy import JSON, Column, event
from sqlmodel import Field, SQLModel

from workbench.changes.diff import (
    DiffSegment,
    aligned_diff,
    approval_transition_label,
    compact_diff,
)
from workbench.core.base_models import CreatedTable, PaginatedResponse


class TranslationChange(CreatedTable, table=True):
    """An edit of a Translation's ``copy`` and/or ``approved`` fields.

    ``diff`` maps each changed field to ``[old, new]``; approval values are
    stored as ApprovalState values. Rows are append-only.
    """

    __tablename__ = "translation_change"

    translation_id: uuid.UUID = Field(
        foreign_key="translation.id", nullable=False, ondelete="CASCADE", index=True
    )
    user_id: uuid.UUID | None = Field(
        default=None, foreign_key="user.id", nullable=True, ondelete="SET NULL"
    )
    diff: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

    def _copy_pair(self) -> tuple[str | None, str | None] | None:
        pair = self.diff.get("copy")
        return (pair[0], pair[1]) if pair else None

    def compact_copy(self) -> tuple[str | None, str | None]:
        """Minimal changed fragments of the copy, (None, None) if untouched."""
        pair = self._copy_pair()
        if pair is None:
            return None, None
        return compact_diff(*pair)

    def full_copy(
        self,
    ) -> tuple[list[DiffSegment] | None, list[DiffSegment] | None]:
        """Old and new copy as highlighted segments, (None, None) if untouched."""
        pair = self._copy_pair()
        if pair is None:
            return None, None
        return aligned_diff(*pair)

    def approval_transition(self) -> str | None:
        pair = self.diff.get("approved")
        if not pair:
            return None
        return approval_transition_label(pair[0], pair[1])


@event.listens_for(TranslationChange, "before_update")
def _reject_change_update(mapper: Any, connection: Any, target: TranslationChange) -> None:
    raise ValueError(f"TranslationChange {target.id} is immutable")


class TranslationChangePublic(SQLModel):
    """History entry as displayed next to a translation."""

    id: uuid.UUID
    translation_id: uuid.UUID
    user_id: uuid.UUID | None
    created_at: datetime
    diff: dict[str, Any]
    compact_copy_from: str | None = None
    compact_copy_to: str | None = None
    full_copy_from: list[DiffSegment] | None = None
    full_copy_to: list[DiffSegment] | None = None
    approval_transition: str | None = None

    @classmethod
    def from_change(cls, change: TranslationChange) -> "TranslationChangePublic":
        compact_from, compact_to = change.compact_copy()
        full_from, full_to = change.full_copy()
        return cls(
            id=change.id,
            translation_id=change.translation_id,
            user_id=change.user_id,
            created_at=change.created_at,
            diff=change.diff,
            compact_copy_from=compact_from,
            compact_copy_to=compact_to,
            full_copy_from=full_from,
            full_copy_to=full_to,
            approval_transition=change.approval_transition(),
        )


TranslationChangesPublic = PaginatedResponse[TranslationChangePublic]
