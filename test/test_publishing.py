"""
Publish state machine tests
"""

import pytest

from vibrant.authoring.state import LocaleDraft
from vibrant.exceptions import InvalidStatusTransitionError, PublishNotAllowedError
from vibrant.i18n.locale import SUPPORTED_LOCALES, Locale
from vibrant.models.article import ArticleStatus
from vibrant.services.publishing import (
    PublishAction,
    can_archive,
    can_publish,
    is_complete,
    missing_locales,
    next_status,
    plan_persist,
)


def _drafts(**overrides):
    """Complete, unpublished drafts for every locale, with per-locale overrides."""
    drafts = {
        locale: LocaleDraft(locale=locale, title=f"Title {locale.value}", body_md=f"Body {locale.value}")
        for locale in SUPPORTED_LOCALES
    }
    for code, fields in overrides.items():
        drafts[Locale(code)] = LocaleDraft(locale=Locale(code), **fields)
    return drafts


class TestIsComplete:
    @pytest.mark.parametrize(
        "title,body,expected",
        [
            ("Title", "Body", True),
            ("  Title ", "\nBody\n", True),
            ("Title", "   ", False),
            ("", "Body", False),
            ("", "", False),
            (None, None, False),
        ],
    )
    def test_trimmed_title_and_body_required(self, title, body, expected):
        assert is_complete(title, body) is expected


class TestNextStatus:
    def test_save_demotes_published(self):
        assert next_status(ArticleStatus.PUBLISHED, PublishAction.SAVE) == ArticleStatus.DRAFT

    def test_save_keeps_draft(self):
        assert next_status(ArticleStatus.DRAFT, PublishAction.SAVE) == ArticleStatus.DRAFT

    def test_save_keeps_archived(self):
        assert next_status(ArticleStatus.ARCHIVED, PublishAction.SAVE) == ArticleStatus.ARCHIVED

    @pytest.mark.parametrize("current", list(ArticleStatus))
    def test_publish_from_any_status(self, current):
        assert next_status(current, PublishAction.PUBLISH) == ArticleStatus.PUBLISHED

    @pytest.mark.parametrize("current", [ArticleStatus.DRAFT, ArticleStatus.PUBLISHED])
    def test_archive(self, current):
        assert next_status(current, PublishAction.ARCHIVE) == ArticleStatus.ARCHIVED

    def test_archive_twice_is_invalid(self):
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            next_status(ArticleStatus.ARCHIVED, PublishAction.ARCHIVE)

        assert exc_info.value.details["current_status"] == "ARCHIVED"

    def test_accepts_raw_status_strings(self):
        assert next_status("PUBLISHED", PublishAction.SAVE) == ArticleStatus.DRAFT


class TestGates:
    def test_can_archive(self):
        assert can_archive(ArticleStatus.DRAFT) is True
        assert can_archive(ArticleStatus.PUBLISHED) is True
        assert can_archive(ArticleStatus.ARCHIVED) is False

    def test_can_publish_with_every_locale_complete(self):
        assert can_publish(_drafts()) is True

    def test_one_incomplete_locale_blocks_publish(self):
        assert can_publish(_drafts(es={"title": "Hola", "body_md": ""})) is False

    def test_one_blank_locale_blocks_publish(self):
        assert can_publish(_drafts(pt={})) is False

    def test_missing_locales_in_supported_order(self):
        translations = [LocaleDraft(locale=Locale.fr, title="T", body_md="B")]

        assert missing_locales(translations) == [Locale.en, Locale.es, Locale.pt]


class TestPlanPersist:
    def test_publish_marks_every_translation_published(self):
        payload = plan_persist(PublishAction.PUBLISH, ArticleStatus.DRAFT, _drafts())

        assert payload.status == ArticleStatus.PUBLISHED
        assert [t.locale for t in payload.translations] == list(SUPPORTED_LOCALES)
        assert all(t.published for t in payload.translations)

    def test_publish_with_incomplete_locale_is_rejected(self):
        with pytest.raises(PublishNotAllowedError) as exc_info:
            plan_persist(PublishAction.PUBLISH, ArticleStatus.DRAFT, _drafts(fr={"title": "Titre"}))

        assert exc_info.value.details["missing_locales"] == ["fr"]
        assert exc_info.value.status_code == 400

    def test_save_while_published_sends_draft(self):
        drafts = _drafts(en={"title": "T", "body_md": "B", "published": True})

        payload = plan_persist(PublishAction.SAVE, ArticleStatus.PUBLISHED, drafts)

        assert payload.status == ArticleStatus.DRAFT
        flags = {t.locale: t.published for t in payload.translations}
        assert flags[Locale.en] is True
        assert flags[Locale.es] is False

    def test_save_only_sends_complete_locales(self):
        drafts = _drafts(es={"title": "Hola"}, pt={})

        payload = plan_persist(PublishAction.SAVE, ArticleStatus.DRAFT, drafts)

        assert {t.locale for t in payload.translations} == {Locale.en, Locale.fr}

    def test_archive_keeps_published_flags(self):
        drafts = _drafts(fr={"title": "T", "body_md": "B", "published": True})

        payload = plan_persist(PublishAction.ARCHIVE, ArticleStatus.PUBLISHED, drafts)

        assert payload.status == ArticleStatus.ARCHIVED
        assert {t.locale for t in payload.translations if t.published} == {Locale.fr}

    def test_archive_of_archived_is_rejected(self):
        with pytest.raises(InvalidStatusTransitionError):
            plan_persist(PublishAction.ARCHIVE, ArticleStatus.ARCHIVED, _drafts())

    def test_action_given_as_string(self):
        payload = plan_persist("save", ArticleStatus.DRAFT, _drafts())

        assert payload.status == ArticleStatus.DRAFT
