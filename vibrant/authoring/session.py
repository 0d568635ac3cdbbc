"""
Authoring Session

Drives the authoring reducer against the content store. Each of save,
publish and archive packages the complete drafts into one store call; only
one of them may be outstanding at a time.
"""

from __future__ import annotations

import logging
from typing import Any

from vibrant.authoring.editor import MarkdownChangeGate
from vibrant.authoring.state import (
    AuthoringState,
    FieldEdited,
    PersistFailed,
    PersistStarted,
    PersistSucceeded,
    StatusSelected,
    initial_state,
    reduce,
)
from vibrant.exceptions import PersistInFlightError
from vibrant.i18n.locale import Locale
from vibrant.models.article import ArticleStatus
from vibrant.services.publishing import PublishAction, plan_persist

logger = logging.getLogger(__name__)


class AuthoringSession:
    """One editor's form over one article (or a new one).

    ``store`` is anything with the ``create_article``/``update_article``
    coroutines of ``ArticleService``.
    """

    def __init__(self, store: Any, state: AuthoringState | None = None):
        self.store = store
        self.state = state or initial_state()

    @classmethod
    def for_article(cls, store: Any, article: Any) -> AuthoringSession:
        return cls(store, initial_state(article.id, article.status, article.translations))

    # ============== Local edits ==============

    def edit(self, locale: Locale | str, field: str, value: str) -> AuthoringState:
        self.state = reduce(self.state, FieldEdited(Locale(locale), field, value))
        return self.state

    def select_status(self, status: ArticleStatus | str) -> AuthoringState:
        self.state = reduce(self.state, StatusSelected(ArticleStatus(status)))
        return self.state

    def body_editor(self, locale: Locale | str) -> MarkdownChangeGate:
        """Change gate wired to one locale's body, primed with its current Markdown."""
        locale = Locale(locale)
        return MarkdownChangeGate(
            on_change=lambda markdown: self.edit(locale, "body_md", markdown),
            markdown=self.state.drafts[locale].body_md,
        )

    # ============== Persist actions ==============

    async def save(self) -> list[Locale]:
        return await self._persist(PublishAction.SAVE)

    async def publish(self) -> list[Locale]:
        return await self._persist(PublishAction.PUBLISH)

    async def archive(self) -> list[Locale]:
        return await self._persist(PublishAction.ARCHIVE)

    async def _persist(self, action: PublishAction) -> list[Locale]:
        """Run one persist and return the locales that became saved.

        Guards run before the store is touched: another persist in flight,
        publish with incomplete locales, archive of an archived article.
        On a store failure the drafts stay as they were and the error
        propagates.
        """
        if self.state.pending is not None:
            raise PersistInFlightError(self.state.pending.value)

        # Archive is judged against what the store holds, not the local selection
        status = self.state.stored_status if action == PublishAction.ARCHIVE else self.state.status
        payload = plan_persist(action, status, self.state.drafts)
        self.state = reduce(
            self.state,
            PersistStarted(action, frozenset(t.locale for t in payload.translations)),
        )

        try:
            if self.state.article_id is None:
                article = await self.store.create_article(payload)
            else:
                article = await self.store.update_article(self.state.article_id, payload)
        except Exception as e:
            self.state = reduce(self.state, PersistFailed(str(e)))
            logger.warning("Authoring %s failed: article_id=%s error=%s", action.value, self.state.article_id, e)
            raise

        self.state = reduce(
            self.state,
            PersistSucceeded(article.id, article.status, tuple(article.translations)),
        )
        for locale in self.state.notifications:
            logger.info("Translation saved: article_id=%s locale=%s", article.id, locale.value)
        return list(self.state.notifications)
