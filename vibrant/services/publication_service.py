"""
Publication Service

Reader-facing views over published articles: the publications index, the
article page, the method page and the footer's recent articles. Every view
resolves the translation to show through ``resolve_article``; articles that
resolve to nothing are left out of lists and are a 404 on detail pages.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from vibrant.config import settings
from vibrant.exceptions import ArticleNotFoundError
from vibrant.i18n.locale import LANGUAGE_NAMES, Locale
from vibrant.i18n.resolution import ResolvedTranslation, resolve_article
from vibrant.models.article import Article, ArticleStatus
from vibrant.schemas.publication import PublicationCard, PublicationDetail, PublicationLink
from vibrant.services.article_service import ArticleService
from vibrant.utils.markdown import build_preview

logger = logging.getLogger(__name__)


def _card(article: Article, resolved: ResolvedTranslation) -> PublicationCard:
    translation = resolved.translation
    return PublicationCard(
        id=article.id,
        title=translation.title,
        created_at=article.created_at,
        locale=resolved.locale,
        is_fallback=resolved.is_fallback,
        language_name=LANGUAGE_NAMES[resolved.locale],
        preview_md=build_preview(
            translation.body_md,
            max_paragraphs=settings.preview_max_paragraphs,
            max_chars=settings.preview_max_chars,
        ),
    )


def _detail(article: Article, resolved: ResolvedTranslation) -> PublicationDetail:
    return PublicationDetail(
        id=article.id,
        title=resolved.translation.title,
        created_at=article.created_at,
        locale=resolved.locale,
        is_fallback=resolved.is_fallback,
        language_name=LANGUAGE_NAMES[resolved.locale],
        body_md=resolved.translation.body_md,
    )


class PublicationService:
    """Service for the public publications pages."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.articles = ArticleService(db)

    async def _listable(self, locale: Locale) -> list[tuple[Article, ResolvedTranslation]]:
        """Published articles that resolve in ``locale``, newest first, method page excluded."""
        resolved = []
        for article in await self.articles.list_articles(status=ArticleStatus.PUBLISHED, sort="newest"):
            if article.id == settings.method_article_id:
                continue
            translation = resolve_article(article, locale, settings.fallback_language)
            if translation is not None:
                resolved.append((article, translation))
        return resolved

    async def list_publications(self, locale: Locale | str) -> list[PublicationCard]:
        return [_card(article, resolved) for article, resolved in await self._listable(Locale(locale))]

    async def get_publication(self, article_id: str, locale: Locale | str) -> PublicationDetail:
        """The article page.

        Raises:
            ArticleNotFoundError: unknown id, unpublished article, or no
                published translation in the locale or the fallback.
        """
        article = await self.articles.get_article_with_translations(article_id)
        resolved = resolve_article(article, locale, settings.fallback_language)
        if resolved is None:
            logger.info("Publication not readable: id=%s locale=%s", article_id, Locale(locale).value)
            raise ArticleNotFoundError(article_id)
        return _detail(article, resolved)

    async def get_method_page(self, locale: Locale | str) -> PublicationDetail | None:
        """The method page, or None when it has nothing readable."""
        if not settings.method_article_id:
            return None
        article = await self.articles.get_article_with_translations(settings.method_article_id)
        resolved = resolve_article(article, locale, settings.fallback_language)
        if resolved is None:
            return None
        return _detail(article, resolved)

    async def recent_publications(self, locale: Locale | str, limit: int | None = None) -> list[PublicationLink]:
        """Footer links. The limit counts readable articles only."""
        if limit is None:
            limit = settings.footer_recent_limit
        listable = await self._listable(Locale(locale))
        return [
            PublicationLink(id=article.id, title=resolved.translation.title)
            for article, resolved in listable[: max(limit, 0)]
        ]
