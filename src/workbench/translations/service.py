"""Edits of translations by translators and reviewers.

Every edit follows the same steps: capture a snapshot of the tracked
fields, mutate, validate, then save the translation together with its
change record in one transaction. Role checks (who may edit approved copy,
who may review) are made by the caller before these functions run.
"""

from sqlalchemy import inspect
from sqlmodel import Session

from workbench.changes import TranslationChange, record_change
from workbench.core.base_models import utc_now
from workbench.core.exceptions import ValidationError
from workbench.core.logging import bound_context, get_logger
from workbench.core.uow import atomic
from workbench.translations.models import (
    ApprovalState,
    Translation,
    TranslationSnapshot,
)
from workbench.users.models import User

logger = get_logger(__name__)

EditResult = tuple[Translation, TranslationChange | None]


def validate_translation(translation: Translation) -> None:
    """Check field invariants before a translation is saved.

    Raises:
        ValidationError: naming the offending field
    """
    if translation.copy is None:
        if translation.approved is not ApprovalState.PENDING:
            raise ValidationError(
                "Untranslated copy cannot be approved or rejected",
                field="approved",
            )
        if translation.translator_id is not None:
            raise ValidationError(
                "Untranslated copy cannot have a translator", field="translator_id"
            )
    if translation.translated != (translation.copy is not None):
        raise ValidationError(
            "Translated flag does not match copy", field="translated"
        )


def _save(
    session: Session,
    translation: Translation,
    actor: User,
    snapshot: TranslationSnapshot,
) -> EditResult:
    try:
        validate_translation(translation)
    except ValidationError as e:
        # Discard the rejected edit so the session holds the stored values
        if inspect(translation).persistent:
            session.expire(translation)
        logger.info("translation_edit_invalid", field=e.field, error=e.message)
        raise
    translation.updated_at = utc_now()

    with atomic(session) as uow:
        uow.session.add(translation)
        uow.flush()
        change = record_change(translation, actor, snapshot)
        if change is not None:
            uow.session.add(change)

    session.refresh(translation)
    if change is not None:
        session.refresh(change)
    return translation, change


def update_copy(
    *,
    session: Session,
    translation: Translation,
    actor: User,
    copy: str | None,
    notes: str | None = None,
    blank_string: bool = False,
    preserve_review: bool = False,
) -> EditResult:
    """Replace a translation's copy and, optionally, its notes.

    Blank copy erases the translation (marks it untranslated) unless
    `blank_string` is set. Changed copy makes `actor` the translator and
    sends the translation back to review unless `preserve_review` is set.
    Notes are left alone when `notes` is None; a blank string clears them.
    Notes are not part of the edit history. Nothing is saved when neither
    copy nor notes changed.

    Args:
        session: Database session
        translation: Translation to edit
        actor: User making the edit
        copy: New translated copy
        notes: New translator notes, None to keep the current ones
        blank_string: Keep an empty string as real copy
        preserve_review: Keep the current approval state on a copy change

    Returns:
        Tuple of (translation, change record or None)
    """
    snapshot = TranslationSnapshot.capture(translation)

    if not blank_string and (copy is None or not copy.strip()):
        copy = None
    new_notes = translation.notes if notes is None else (notes.strip() or None)

    copy_changed = copy != snapshot.copy
    notes_changed = new_notes != translation.notes
    if not copy_changed and not notes_changed:
        return translation, None

    with bound_context(translation_id=str(translation.id), user_id=str(actor.id)):
        translation.modifier_id = actor.id
        if notes_changed:
            translation.notes = new_notes

        if copy_changed:
            translation.copy = copy
            translation.translated = copy is not None
            translation.translator_id = actor.id
            if not preserve_review:
                translation.approved = ApprovalState.PENDING
                translation.reviewer_id = None

            if copy is None:
                translation.translator_id = None
                translation.approved = ApprovalState.PENDING
                translation.reviewer_id = None

        logger.info(
            "translation_copy_updated",
            erased=copy_changed and copy is None,
            notes_changed=notes_changed,
        )
        return _save(session, translation, actor, snapshot)


def _review(
    session: Session,
    translation: Translation,
    actor: User,
    state: ApprovalState,
) -> EditResult:
    snapshot = TranslationSnapshot.capture(translation)

    with bound_context(translation_id=str(translation.id), user_id=str(actor.id)):
        translation.approved = state
        translation.reviewer_id = actor.id
        translation.modifier_id = actor.id

        logger.info("translation_reviewed", approved=state.value)
        return _save(session, translation, actor, snapshot)


def approve(*, session: Session, translation: Translation, actor: User) -> EditResult:
    """Mark a translation approved with `actor` as reviewer."""
    return _review(session, translation, actor, ApprovalState.APPROVED)


def reject(*, session: Session, translation: Translation, actor: User) -> EditResult:
    """Mark a translation rejected with `actor` as reviewer."""
    return _review(session, translation, actor, ApprovalState.REJECTED)
