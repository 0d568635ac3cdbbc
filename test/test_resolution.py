"""
Translation resolution tests

Pure tests over in-memory translation records; no database.
"""

from itertools import permutations

import pytest
from utils.mock_utils import make_article, make_translation

from vibrant.i18n.locale import Locale
from vibrant.i18n.resolution import ResolvedTranslation, resolve_article, resolve_translation
from vibrant.models.article import ArticleStatus


class TestResolveTranslation:
    def test_requested_locale_wins(self):
        en = make_translation("en", "Hello", "Body")
        fr = make_translation("fr", "Bonjour", "Corps")

        resolved = resolve_translation([en, fr], "fr", "en", require_published=True)

        assert resolved == ResolvedTranslation(translation=fr, is_fallback=False)
        assert resolved.locale == Locale.fr

    def test_result_does_not_depend_on_order(self):
        translations = [
            make_translation("en", "Hello"),
            make_translation("fr", "Bonjour"),
            make_translation("es", "Hola", published=False),
            make_translation("pt", "Olá"),
        ]

        results = {
            (resolve_translation(list(order), "fr", "en", True).translation.title)
            for order in permutations(translations)
        }
        assert results == {"Bonjour"}

    def test_fallback_locale_is_flagged(self):
        en = make_translation("en", "Hello")

        resolved = resolve_translation([en], "fr", "en", require_published=True)

        assert resolved.translation is en
        assert resolved.is_fallback is True

    def test_unpublished_requested_locale_uses_fallback(self):
        en = make_translation("en", "Hello")
        fr = make_translation("fr", "Bonjour", published=False)

        resolved = resolve_translation([fr, en], "fr", "en", require_published=True)

        assert resolved.translation is en
        assert resolved.is_fallback is True

    def test_nothing_published_is_not_found(self):
        translations = [make_translation("en", published=False), make_translation("fr", published=False)]

        assert resolve_translation(translations, "fr", "en", require_published=True) is None

    def test_neither_locale_present_is_not_found(self):
        translations = [make_translation("es"), make_translation("pt")]

        assert resolve_translation(translations, "fr", "en", require_published=True) is None

    def test_empty_translation_set(self):
        assert resolve_translation([], "en", "en", require_published=True) is None

    def test_authoring_reads_ignore_published_flag(self):
        fr = make_translation("fr", "Brouillon", published=False)

        resolved = resolve_translation([fr], "fr", "en", require_published=False)

        assert resolved.translation is fr
        assert resolved.is_fallback is False

    def test_requested_equal_to_fallback(self):
        en = make_translation("en", "Hello")

        resolved = resolve_translation([en], "en", "en", require_published=True)

        assert resolved.is_fallback is False

    def test_unsupported_requested_locale_raises(self):
        with pytest.raises(ValueError):
            resolve_translation([make_translation("en")], "de", "en", require_published=True)


class TestResolveArticle:
    def test_fallback_scenario(self):
        """Only an English translation, visitor reads French."""
        article = make_article(ArticleStatus.PUBLISHED, [make_translation("en", "Hello", "Body")])

        resolved = resolve_article(article, "fr", "en")

        assert resolved.translation.title == "Hello"
        assert resolved.is_fallback is True

    def test_direct_scenario(self):
        article = make_article(ArticleStatus.PUBLISHED, [make_translation("en", "Hello", "Body")])

        resolved = resolve_article(article, "en", "en")

        assert resolved.is_fallback is False

    def test_article_gate_wins_over_translation_flag(self):
        article = make_article(ArticleStatus.DRAFT, [make_translation("en", "Hello", "Body", published=True)])

        assert resolve_article(article, "en", "en") is None

    def test_archived_article_is_not_found(self):
        article = make_article(ArticleStatus.ARCHIVED, [make_translation("en", "Hello", "Body")])

        assert resolve_article(article, "en", "en") is None

    def test_gate_skipped_for_authoring(self):
        article = make_article(ArticleStatus.DRAFT, [make_translation("fr", "Brouillon", published=False)])

        resolved = resolve_article(article, "fr", "en", require_published=False)

        assert resolved.translation.title == "Brouillon"

    def test_missing_article(self):
        assert resolve_article(None, "en") is None

    def test_fallback_defaults_to_configured_language(self):
        from vibrant.config import settings

        article = make_article(
            ArticleStatus.PUBLISHED,
            [make_translation(settings.fallback_language, "Fallback")],
        )

        resolved = resolve_article(article, "pt")

        assert resolved.translation.title == "Fallback"
        assert resolved.is_fallback is (settings.fallback_language != "pt")
