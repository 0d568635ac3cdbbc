"""
Tests for the search service
"""

from unittest.mock import AsyncMock

import pytest
from utils.mock_utils import create_test_article, days_ago, full_translations

from vibrant.config import settings
from vibrant.schemas.publication import SearchState
from vibrant.services.search_service import SearchService


class TestEnterQueryState:
    @pytest.mark.parametrize("query", ["", "   ", "\t\n", None])
    async def test_blank_query_never_hits_the_database(self, query):
        db = AsyncMock()

        outcome = await SearchService(db).search(query, "en")

        assert outcome.state == SearchState.ENTER_QUERY
        assert outcome.results == []
        db.execute.assert_not_called()


class TestSearch:
    async def test_results_state_with_highlights(self, test_db):
        await create_test_article(
            test_db,
            {"en": ("Cafe culture", "The cafe opened.\n\nSecond.\n\nThird cafe.", True)},
        )

        outcome = await SearchService(test_db).search("  CAFE ", "en")

        assert outcome.state == SearchState.RESULTS
        assert outcome.query == "CAFE"
        assert outcome.count == 1
        card = outcome.results[0]
        assert card.title == "Cafe culture"
        assert card.title_html == "<mark>Cafe</mark> culture"
        # Third paragraph is outside the excerpt, so it is not highlighted
        assert card.preview_md == "The <mark>cafe</mark> opened.\n\nSecond."

    async def test_no_results_state(self, test_db):
        await create_test_article(test_db, full_translations("Rivers"))

        outcome = await SearchService(test_db).search("mountains", "en")

        assert outcome.state == SearchState.NO_RESULTS
        assert outcome.results == []

    async def test_results_use_resolved_translation(self, test_db):
        await create_test_article(
            test_db,
            {"en": ("Water rights", "About water", True), "fr": ("Droits", "Sur l'eau", True)},
        )

        outcome = await SearchService(test_db).search("water", "fr")

        card = outcome.results[0]
        assert card.title == "Droits"
        assert card.is_fallback is False
        assert card.preview_md == "Sur l'eau"

    async def test_fallback_results_are_flagged(self, test_db):
        await create_test_article(test_db, {"en": ("Water rights", "About water", True)})

        outcome = await SearchService(test_db).search("water", "pt")

        assert outcome.results[0].is_fallback is True
        assert outcome.results[0].language_name == "English"

    async def test_newest_first(self, test_db):
        old = await create_test_article(test_db, full_translations("Soil old"), created_at=days_ago(9))
        new = await create_test_article(test_db, full_translations("Soil new"), created_at=days_ago(1))

        outcome = await SearchService(test_db).search("soil", "en")

        assert [card.id for card in outcome.results] == [new.id, old.id]

    async def test_method_article_excluded(self, test_db):
        await create_test_article(test_db, full_translations("Method soil"), article_id=settings.method_article_id)

        outcome = await SearchService(test_db).search("soil", "en")

        assert outcome.state == SearchState.NO_RESULTS

    async def test_long_excerpt_truncated_before_highlighting(self, test_db, monkeypatch):
        monkeypatch.setattr(settings, "preview_max_chars", 12)
        await create_test_article(test_db, {"en": ("Title", "abc needle xyz needle", True)})

        outcome = await SearchService(test_db).search("needle", "en")

        assert outcome.results[0].preview_md == "abc <mark>needle</mark> x…"
