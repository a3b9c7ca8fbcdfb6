"""Locale codes and the fallback hierarchy.

A locale's fallback chain lists the progressively less specific locales
tried when nothing usable exists in the locale itself. The chain is driven
by a configurable table (``LOCALE_FALLBACKS``) so new locale families can be
added without code changes:

    es-MX -> es-419 -> es -> en

Locales missing from the table fall back by dropping their last subtag
("zh-Hant-TW" -> "zh-Hant" -> "zh"). Every chain ends at the root locale.
"""

from collections.abc import Mapping, Sequence
from typing import NamedTuple

from workbench.core.config import settings


class Locale(NamedTuple):
    """An RFC 5646 locale code."""

    code: str

    @property
    def language(self) -> str:
        return self.code.split("-")[0]

    @property
    def parent_code(self) -> str | None:
        """The code with its last subtag removed, or None for a bare language."""
        if "-" not in self.code:
            return None
        return self.code.rsplit("-", 1)[0]

    def __str__(self) -> str:
        return self.code


def normalize_locale(code: str) -> str:
    """Canonicalise subtag casing and separators.

    Handles cases like:
    - "EN_us" -> "en-US"
    - "zh-hant-tw" -> "zh-Hant-TW"
    - "es-419" -> "es-419"
    """
    subtags = code.strip().replace("_", "-").split("-")
    normalized = [subtags[0].lower()]
    for subtag in subtags[1:]:
        if len(subtag) == 4 and subtag.isalpha():
            normalized.append(subtag.title())
        elif (len(subtag) == 2 and subtag.isalpha()) or (
            len(subtag) == 3 and subtag.isdigit()
        ):
            normalized.append(subtag.upper())
        else:
            normalized.append(subtag.lower())
    return "-".join(normalized)


class LocaleHierarchy:
    """Resolves fallback chains from a locale-to-parents table."""

    def __init__(self, fallbacks: Mapping[str, Sequence[str]], root: str):
        self._root = normalize_locale(root)
        self._table: dict[str, tuple[str, ...]] = {
            normalize_locale(code): tuple(normalize_locale(p) for p in parents)
            for code, parents in fallbacks.items()
        }

    @property
    def root(self) -> Locale:
        return Locale(self._root)

    def _parents(self, code: str) -> tuple[str, ...]:
        if code in self._table:
            return self._table[code]
        parent = Locale(code).parent_code
        return (parent,) if parent else ()

    def fallbacks(self, locale: Locale | str) -> tuple[Locale, ...]:
        """Return the fallback chain for a locale, most specific first.

        The chain starts with the locale itself, expands parents depth first,
        skips locales already visited and ends with the root exactly once.
        """
        code = normalize_locale(str(locale))
        chain: list[str] = []
        pending = [code]
        while pending:
            current = pending.pop(0)
            if current in chain:
                continue
            chain.append(current)
            pending[0:0] = self._parents(current)

        if self._root in chain:
            chain.remove(self._root)
        chain.append(self._root)
        return tuple(Locale(c) for c in chain)


def get_hierarchy() -> LocaleHierarchy:
    """Hierarchy built from the configured table and root locale."""
    return LocaleHierarchy(settings.LOCALE_FALLBACKS, settings.ROOT_LOCALE)


def fallbacks(locale: Locale | str) -> tuple[Locale, ...]:
    """Fallback chain for a locale using the configured hierarchy."""
    return get_hierarchy().fallbacks(locale)
