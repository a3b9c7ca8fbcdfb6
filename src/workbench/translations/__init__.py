from workbench.translations.crud import (
    find_exact_match,
    get_translation,
    require_translation,
)
from workbench.translations.matching import fuzzy_match, resolve_exact_match
from workbench.translations.models import (
    ApprovalState,
    FuzzyMatch,
    Translation,
    TranslationBase,
    TranslationSnapshot,
)

__all__ = [
    # Models
    "ApprovalState",
    "FuzzyMatch",
    "Translation",
    "TranslationBase",
    "TranslationSnapshot",
    # CRUD
    "find_exact_match",
    "get_translation",
    "require_translation",
    # Matching
    "fuzzy_match",
    "resolve_exact_match",
]
