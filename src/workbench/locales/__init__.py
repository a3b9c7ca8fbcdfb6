from workbench.locales.config import (
    Locale,
    LocaleHierarchy,
    fallbacks,
    get_hierarchy,
    normalize_locale,
)

__all__ = [
    "Locale",
    "LocaleHierarchy",
    "fallbacks",
    "get_hierarchy",
    "normalize_locale",
]
