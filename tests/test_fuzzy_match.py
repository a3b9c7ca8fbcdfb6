"""
Unit tests for fuzzy match ranking.

The translations index is replaced by an AsyncMock returning raw
candidate documents in index relevance order.
"""
from unittest.mock import AsyncMock, patch

import pytest

from workbench.translations.matching import fuzzy_match, match_percentage
from workbench.translations.models import Translation


def candidate(source_copy, copy="x"):
    return {"source_copy": source_copy, "copy": copy, "rfc5646_locale": "es"}


@pytest.fixture
def translation(project_id):
    return Translation(
        project_id=project_id,
        key="greeting",
        rfc5646_locale="es",
        source_copy="Hello world",
    )


class TestMatchPercentage:
    """Tests for match_percentage"""

    def test_identical(self):
        assert match_percentage("Hello world", "Hello world") == 100

    def test_one_edit(self):
        """One insertion over twelve characters"""
        assert match_percentage("Hello world", "Hello world!") == 92

    def test_disjoint(self):
        assert match_percentage("abc", "xyz") == 0

    def test_empty_strings(self):
        assert match_percentage("", "") == 100

    def test_symmetric(self):
        assert match_percentage("kitten", "sitting") == match_percentage("sitting", "kitten")


class TestFuzzyMatch:
    """Tests for fuzzy_match"""

    @pytest.mark.asyncio
    async def test_ranks_and_filters(self, translation):
        """Scores under 70 are dropped, the rest sorted best first"""
        search = AsyncMock(
            return_value=[
                candidate("Hello world!", "¡Hola mundo!"),
                candidate("Goodbye", "Adiós"),
                candidate("Hello, world", "Hola, mundo"),
                candidate("Hello world", "Hola mundo"),
                candidate("Hello there", "Hola"),
            ]
        )

        matches = await fuzzy_match(translation, search=search)

        assert [(m.source_copy, m.match_percentage) for m in matches] == [
            ("Hello world", 100),
            ("Hello world!", 92),
            ("Hello, world", 92),
        ]
        assert matches[0].copy == "Hola mundo"

    @pytest.mark.asyncio
    async def test_queries_locale_with_cap(self, translation):
        """The index is asked for at most five candidates in the locale"""
        search = AsyncMock(return_value=[])

        await fuzzy_match(translation, search=search)

        search.assert_awaited_once_with("es", "Hello world", 5)

    @pytest.mark.asyncio
    async def test_cap_applies_before_scoring(self, translation):
        """Only the first five raw candidates are ever scored"""
        search = AsyncMock(
            return_value=[candidate("Goodbye")] * 5 + [candidate("Hello world")]
        )

        assert await fuzzy_match(translation, search=search) == []

    @pytest.mark.asyncio
    async def test_output_contract(self, translation):
        """At most five results, all >= 70, non-increasing"""
        search = AsyncMock(
            return_value=[
                candidate("Hello worlds"),
                candidate("Hello world"),
                candidate("Hallo world"),
                candidate("Hello word"),
                candidate("Jello world"),
            ]
        )

        matches = await fuzzy_match(translation, search=search)
        percentages = [m.match_percentage for m in matches]

        assert len(matches) <= 5
        assert all(p >= 70 for p in percentages)
        assert percentages == sorted(percentages, reverse=True)

    @pytest.mark.asyncio
    async def test_untranslated_candidates_skipped(self, translation):
        search = AsyncMock(return_value=[candidate("Hello world", copy=None)])
        assert await fuzzy_match(translation, search=search) == []

    @pytest.mark.asyncio
    async def test_documents_without_source_copy_skipped(self, translation):
        """Index documents missing their source copy are ignored"""
        search = AsyncMock(
            return_value=[{"copy": "Hola"}, candidate("Hello world", "Hola mundo")]
        )

        matches = await fuzzy_match(translation, search=search)

        assert [m.copy for m in matches] == ["Hola mundo"]

    @pytest.mark.asyncio
    async def test_no_candidates(self, translation):
        """An empty index result is an empty suggestion list"""
        assert await fuzzy_match(translation, search=AsyncMock(return_value=[])) == []

    @pytest.mark.asyncio
    async def test_threshold_from_settings(self, translation, monkeypatch):
        from workbench.core.config import settings

        monkeypatch.setattr(settings, "FUZZY_MATCH_THRESHOLD", 95)
        search = AsyncMock(
            return_value=[candidate("Hello world!"), candidate("Hello world")]
        )

        matches = await fuzzy_match(translation, search=search)

        assert [m.source_copy for m in matches] == ["Hello world"]

    @pytest.mark.asyncio
    async def test_defaults_to_index_search(self, translation):
        with patch(
            "workbench.translations.matching.search_fuzzy_candidates",
            new=AsyncMock(return_value=[candidate("Hello world", "Hola mundo")]),
        ) as search:
            matches = await fuzzy_match(translation)

        search.assert_awaited_once()
        assert matches[0].match_percentage == 100
