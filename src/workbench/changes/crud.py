import uuid

from sqlmodel import Session, col, select

from workbench.changes.models import TranslationChange
from workbench.core.db import paginate


def get_changes(
    *,
    session: Session,
    translation_id: uuid.UUID,
    skip: int = 0,
    limit: int = 100,
) -> tuple[list[TranslationChange], int]:
    """Get the edit history of a translation, newest first.

    Args:
        session: Database session
        translation_id: Translation whose history is requested
        skip: Number of records to skip
        limit: Maximum number of records to return

    Returns:
        Tuple of (list of changes, total count)
    """
    statement = select(TranslationChange).where(
        TranslationChange.translation_id == translation_id
    )
    return paginate(
        session,
        statement,
        skip=skip,
        limit=limit,
        order_by=col(TranslationChange.created_at).desc(),
    )
