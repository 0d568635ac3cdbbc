"""
Publish state machine

Article lifecycle: DRAFT → PUBLISHED → ARCHIVED, driven only by explicit
authoring actions. Nothing here touches the database; ``plan_persist``
turns an action plus the current drafts into the single write the store
performs, and rejects illegal actions before any store call.

    save     PUBLISHED → DRAFT, DRAFT → DRAFT, ARCHIVED → ARCHIVED
    publish  any → PUBLISHED        (every locale complete)
    archive  DRAFT | PUBLISHED → ARCHIVED
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from vibrant.exceptions import InvalidStatusTransitionError, PublishNotAllowedError
from vibrant.i18n.locale import SUPPORTED_LOCALES, Locale
from vibrant.models.article import ArticleStatus
from vibrant.schemas.article import ArticleWrite, TranslationInput

logger = logging.getLogger(__name__)


class PublishAction(str, enum.Enum):
    SAVE = "save"
    PUBLISH = "publish"
    ARCHIVE = "archive"


def is_complete(title: str | None, body_md: str | None) -> bool:
    """A translation is complete when title and body are non-empty after trimming."""
    return bool((title or "").strip()) and bool((body_md or "").strip())


def missing_locales(translations: Iterable[Any]) -> list[Locale]:
    """Supported locales without a complete translation among ``translations``."""
    complete = {Locale(t.locale) for t in translations if is_complete(t.title, t.body_md)}
    return [locale for locale in SUPPORTED_LOCALES if locale not in complete]


def can_publish(drafts: Mapping[Locale, Any]) -> bool:
    return not missing_locales(drafts.values())


def can_archive(status: ArticleStatus) -> bool:
    return status != ArticleStatus.ARCHIVED


def next_status(current: ArticleStatus, action: PublishAction) -> ArticleStatus:
    """Status the article ends up in after ``action``."""
    current = ArticleStatus(current)
    if action == PublishAction.SAVE:
        # Editing a live article takes it offline until it is published again
        if current == ArticleStatus.PUBLISHED:
            return ArticleStatus.DRAFT
        return current
    if action == PublishAction.PUBLISH:
        return ArticleStatus.PUBLISHED
    if action == PublishAction.ARCHIVE:
        if not can_archive(current):
            raise InvalidStatusTransitionError(current.value, ArticleStatus.ARCHIVED.value)
        return ArticleStatus.ARCHIVED
    raise ValueError(f"Unknown publish action: {action}")


def plan_persist(
    action: PublishAction,
    status: ArticleStatus,
    drafts: Mapping[Locale, Any],
) -> ArticleWrite:
    """Build the write for ``action`` or raise before anything is sent.

    Only complete locales are packaged; blank and half-filled locales stay
    local. Publishing flags every packaged translation as published; save and
    archive keep each locale's current flag.

    Raises:
        PublishNotAllowedError: publish with any locale incomplete.
        InvalidStatusTransitionError: archive of an archived article.
    """
    action = PublishAction(action)
    if action == PublishAction.PUBLISH:
        missing = missing_locales(drafts.values())
        if missing:
            logger.info("Publish rejected, incomplete locales: %s", [m.value for m in missing])
            raise PublishNotAllowedError([m.value for m in missing])

    target = next_status(status, action)

    translations = [
        TranslationInput(
            locale=locale,
            title=draft.title,
            body_md=draft.body_md,
            published=True if action == PublishAction.PUBLISH else bool(draft.published),
        )
        for locale, draft in sorted(drafts.items(), key=lambda item: item[0].value)
        if is_complete(draft.title, draft.body_md)
    ]
    return ArticleWrite(status=target, translations=translations)
