import uuid

from sqlmodel import Session, col, select

from workbench.core.exceptions import ResourceNotFoundError
from workbench.locales.config import normalize_locale
from workbench.translations.models import ApprovalState, Translation


def get_translation(
    *, session: Session, project_id: uuid.UUID, key: str, locale: str
) -> Translation | None:
    """Get the translation of a project key into a locale.

    Args:
        session: Database session
        project_id: Owning project
        key: Key within the project
        locale: RFC 5646 locale code, in any casing

    Returns:
        Translation if found, None otherwise
    """
    statement = select(Translation).where(
        Translation.project_id == project_id,
        Translation.key == key,
        Translation.rfc5646_locale == normalize_locale(locale),
    )
    return session.exec(statement).first()


def require_translation(
    *, session: Session, project_id: uuid.UUID, key: str, locale: str
) -> Translation:
    """Like get_translation, but raises ResourceNotFoundError when missing."""
    translation = get_translation(
        session=session, project_id=project_id, key=key, locale=locale
    )
    if translation is None:
        raise ResourceNotFoundError("Translation", f"{key}/{locale}")
    return translation


def find_exact_match(
    *, session: Session, translation: Translation, locale: str
) -> Translation | None:
    """Find an approved translation in `locale` reusable for `translation`.

    A candidate must share the source copy and be approved. Candidates for
    the same project and key are preferred; only when there are none is the
    whole locale considered. In both cases the most recently created
    candidate wins. The translation itself is never a candidate.

    Args:
        session: Database session
        translation: Translation looking for a match
        locale: Locale to search in

    Returns:
        The matching Translation, or None
    """
    base = (
        select(Translation)
        .where(
            Translation.rfc5646_locale == normalize_locale(locale),
            Translation.source_copy == translation.source_copy,
            Translation.approved == ApprovalState.APPROVED,
            Translation.id != translation.id,
        )
        .order_by(col(Translation.created_at).desc())
    )

    same_key = base.where(
        Translation.project_id == translation.project_id,
        Translation.key == translation.key,
    )
    match = session.exec(same_key).first()
    if match is None:
        match = session.exec(base).first()
    return match
