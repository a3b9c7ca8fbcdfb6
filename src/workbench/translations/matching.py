"""Translation reuse suggestions.

Exact matches reuse an approved translation of the same source copy, walking
the locale's fallback chain. Fuzzy matches rank near-duplicate source copy
from the translations index by normalized Levenshtein similarity.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from rapidfuzz.distance import Levenshtein
from sqlmodel import Session

from workbench.core.config import settings
from workbench.core.logging import get_logger
from workbench.locales import fallbacks
from workbench.translations import crud
from workbench.translations.index import search_fuzzy_candidates
from workbench.translations.models import FuzzyMatch, Translation

logger = get_logger(__name__)

CandidateSearch = Callable[[str, str, int], Awaitable[list[dict[str, Any]]]]


def resolve_exact_match(
    *, session: Session, translation: Translation
) -> Translation | None:
    """Return the approved translation to reuse for `translation`, if any.

    Locales are tried most specific first. The walk stops at the first
    locale producing a match; later fallbacks are never queried.
    """
    for locale in fallbacks(translation.rfc5646_locale):
        match = crud.find_exact_match(
            session=session, translation=translation, locale=locale.code
        )
        if match is not None:
            logger.info(
                "exact_match_found",
                translation_id=str(translation.id),
                match_id=str(match.id),
                locale=locale.code,
            )
            return match

    logger.debug("exact_match_not_found", translation_id=str(translation.id))
    return None


def match_percentage(query: str, candidate: str) -> int:
    """Similarity of two strings as a whole percentage in [0, 100].

    Based on Levenshtein distance normalized by the longer string's length.
    """
    distance = Levenshtein.normalized_distance(query, candidate)
    return max(0, min(100, round(100 * (1 - distance))))


async def fuzzy_match(
    translation: Translation,
    *,
    search: CandidateSearch | None = None,
) -> list[FuzzyMatch]:
    """Suggest translations whose source copy resembles `translation`'s.

    At most FUZZY_MATCH_LIMIT candidates are requested from the index, then
    scored; those under FUZZY_MATCH_THRESHOLD are dropped and the rest are
    ordered best first (ties keep index order).

    Args:
        translation: Translation being worked on
        search: Candidate lookup, defaults to the OpenSearch index

    Returns:
        Suggestions, best match first
    """
    if search is None:
        search = search_fuzzy_candidates

    query = translation.source_copy
    candidates = await search(
        translation.rfc5646_locale, query, settings.FUZZY_MATCH_LIMIT
    )

    matches = []
    for candidate in candidates[: settings.FUZZY_MATCH_LIMIT]:
        source_copy = candidate.get("source_copy")
        if source_copy is None or candidate.get("copy") is None:
            continue
        percentage = match_percentage(query, source_copy)
        if percentage < settings.FUZZY_MATCH_THRESHOLD:
            continue
        matches.append(
            FuzzyMatch(
                source_copy=source_copy,
                copy=candidate["copy"],
                match_percentage=percentage,
            )
        )

    matches.sort(key=lambda m: m.match_percentage, reverse=True)

    logger.debug(
        "fuzzy_match_completed",
        translation_id=str(translation.id),
        candidates=len(candidates),
        matches=len(matches),
    )
    return matches
