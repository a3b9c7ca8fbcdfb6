from typing import Any

from workbench.changes.models import TranslationChange
from workbench.core.logging import get_logger
from workbench.translations.models import Translation, TranslationSnapshot
from workbench.users.models import User

logger = get_logger(__name__)

# A change record is considered when any of these differ from the snapshot
TRACKED_FIELDS = ("translated", "approved", "copy")

# Fields whose (old, new) pairs end up in the record's diff
DIFF_FIELDS = ("copy", "approved")


def _serialize(value: Any) -> Any:
    return getattr(value, "value", value)


def record_change(
    translation: Translation,
    actor: User,
    old_snapshot: TranslationSnapshot,
) -> TranslationChange | None:
    """Build the history record for an edit of `translation`, if it needs one.

    Values are compared against `old_snapshot`, taken by the caller before
    the edit; ORM dirty flags are never consulted. Only fields whose old and
    new values actually differ make it into the diff.

    Args:
        translation: The translation after the edit
        actor: User who made the edit
        old_snapshot: Field values immediately before the edit

    Returns:
        An unsaved TranslationChange for the caller to persist, or None when
        nothing tracked changed
    """
    if all(
        getattr(old_snapshot, field) == getattr(translation, field)
        for field in TRACKED_FIELDS
    ):
        return None

    diff = {
        field: [
            _serialize(getattr(old_snapshot, field)),
            _serialize(getattr(translation, field)),
        ]
        for field in DIFF_FIELDS
        if getattr(old_snapshot, field) != getattr(translation, field)
    }
    if not diff:
        return None

    change = TranslationChange(
        translation_id=translation.id,
        user_id=actor.id,
        diff=diff,
    )
    logger.info(
        "translation_change_recorded",
        translation_id=str(translation.id),
        user_id=str(actor.id),
        fields=sorted(diff),
    )
    return change
