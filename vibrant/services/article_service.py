"""
Article Service

Persistence of Articles and their per-locale translations: the content store
every authoring and reader surface reads from and writes to.

Methods:
    list_articles                     — admin listing with text/status filters
    get_article_with_translations     — one article, translations eager-loaded
    get_article_by_translation_or_id  — lookup by article id, then translation id
    create_article                    — insert article + translations, one commit
    update_article                    — set status, upsert translations by locale
    search_articles                   — reader-eligible matches, newest first
    delete_article                    — hard delete (cascades to translations)

Writes are last-write-wins; there is no version token.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from vibrant.exceptions import (
    ArticleNotFoundError,
    DatabaseError,
    PublishNotAllowedError,
    UnsupportedLocaleError,
    ValidationError,
)
from vibrant.i18n.locale import SUPPORTED_LOCALES, Locale, is_supported_locale
from vibrant.models.article import Article, ArticleStatus
from vibrant.models.article_translation import ArticleTranslation
from vibrant.schemas.article import ArticleWrite, TranslationInput
from vibrant.services.publishing import missing_locales

logger = logging.getLogger(__name__)

SORT_ORDERS = ("newest", "oldest")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _store_locale(value: Locale | str) -> Locale:
    if isinstance(value, Locale):
        return value
    if not is_supported_locale(value):
        raise UnsupportedLocaleError(str(value), [locale.value for locale in SUPPORTED_LOCALES])
    return Locale(value.strip().lower())


def _text_match(query: str):
    """Case-insensitive substring match on a translation's title or body."""
    needle = query.strip().lower()
    return or_(
        func.lower(ArticleTranslation.title).contains(needle, autoescape=True),
        func.lower(ArticleTranslation.body_md).contains(needle, autoescape=True),
    )


class ArticleService:
    """Service for reading and writing articles."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ============== Reads ==============

    async def list_articles(
        self,
        query: str | None = None,
        status: ArticleStatus | str | None = None,
        sort: str = "newest",
    ) -> list[Article]:
        """All articles with their translations, optionally filtered.

        ``query`` matches any translation's title or body, published or not.
        """
        if sort not in SORT_ORDERS:
            raise ValidationError(f"Unknown sort order '{sort}'", field="sort", details={"allowed": list(SORT_ORDERS)})

        stmt = select(Article)
        if status:
            stmt = stmt.where(Article.status == ArticleStatus(status))
        if query and query.strip():
            stmt = stmt.where(Article.translations.any(_text_match(query)))

        if sort == "oldest":
            stmt = stmt.order_by(Article.created_at.asc(), Article.id.asc())
        else:
            stmt = stmt.order_by(Article.created_at.desc(), Article.id.desc())

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_article_with_translations(self, article_id: str) -> Article | None:
        """Fetch an article by id. Returns None if not found."""
        result = await self.db.execute(select(Article).where(Article.id == article_id))
        return result.scalar_one_or_none()

    async def get_article_by_translation_or_id(self, identifier: str) -> Article | None:
        """Fetch an article by its own id, falling back to the id of one of its translations."""
        article = await self.get_article_with_translations(identifier)
        if article is not None:
            return article

        result = await self.db.execute(
            select(Article).join(ArticleTranslation).where(ArticleTranslation.id == identifier)
        )
        return result.scalars().first()

    async def search_articles(
        self,
        query: str,
        locale: Locale | str,
        fallback_locale: Locale | str,
    ) -> list[Article]:
        """Published articles with a published translation matching ``query``.

        Only translations in ``locale`` or ``fallback_locale`` are searched,
        i.e. the ones a reader could actually be shown. A blank query
        returns nothing.

        Raises:
            UnsupportedLocaleError: either locale is outside the supported set.
        """
        if not query or not query.strip():
            return []

        locales = {_store_locale(locale).value, _store_locale(fallback_locale).value}
        stmt = (
            select(Article)
            .where(
                Article.status == ArticleStatus.PUBLISHED,
                Article.translations.any(
                    and_(
                        ArticleTranslation.published.is_(True),
                        ArticleTranslation.locale.in_(sorted(locales)),
                        _text_match(query),
                    )
                ),
            )
            .order_by(Article.created_at.desc(), Article.id.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    # ============== Writes ==============

    async def create_article(self, payload: ArticleWrite) -> Article:
        """Insert an article and all of its translations in one transaction.

        Raises:
            PublishNotAllowedError: status PUBLISHED without every locale complete.
            DatabaseError: the commit failed; nothing was written.
        """
        self._check_publishable(payload.status, payload.translations)

        # Collection is set up front so reading it after commit never lazy-loads
        article = Article(
            status=payload.status,
            translations=[
                ArticleTranslation(
                    locale=item.locale.value,
                    title=item.title,
                    body_md=item.body_md,
                    published=item.published,
                )
                for item in payload.translations
            ],
        )

        self.db.add(article)
        await self._commit("create_article")
        logger.info(
            "Article created: id=%s status=%s locales=%s",
            article.id,
            article.status.value,
            [t.locale for t in article.translations],
        )
        return article

    async def update_article(self, article_id: str, payload: ArticleWrite) -> Article:
        """Set the status and upsert every translation in ``payload``.

        Translations are matched on (article, locale); locales absent from the
        payload are left untouched. Article row and translation rows are
        committed together.

        Raises:
            ArticleNotFoundError: no article with ``article_id``.
            PublishNotAllowedError: resulting status PUBLISHED while some
                locale lacks a complete translation.
            DatabaseError: the commit failed; nothing was written.
        """
        article = await self.get_article_with_translations(article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)

        merged = {Locale(t.locale): t for t in article.translations}
        merged.update({item.locale: item for item in payload.translations})
        self._check_publishable(payload.status, merged.values())

        now = _utcnow()
        existing = {t.locale: t for t in article.translations}
        for item in payload.translations:
            translation = existing.get(item.locale.value)
            if translation is None:
                article.translations.append(
                    ArticleTranslation(
                        locale=item.locale.value,
                        title=item.title,
                        body_md=item.body_md,
                        published=item.published,
                    )
                )
                continue
            translation.title = item.title
            translation.body_md = item.body_md
            translation.published = item.published
            translation.updated_at = now

        article.status = payload.status
        article.updated_at = now

        await self._commit("update_article")
        logger.info(
            "Article updated: id=%s status=%s locales=%s",
            article.id,
            article.status.value,
            [item.locale.value for item in payload.translations],
        )
        return article

    async def delete_article(self, article_id: str) -> bool:
        """Hard-delete an article and its translations.

        Returns True if a row was deleted, False if it did not exist.
        """
        article = await self.get_article_with_translations(article_id)
        if article is None:
            return False

        await self.db.delete(article)
        await self._commit("delete_article")
        logger.info("Article deleted: id=%s", article_id)
        return True

    # ============== Helpers ==============

    @staticmethod
    def _check_publishable(status: ArticleStatus, translations: Iterable[ArticleTranslation | TranslationInput]) -> None:
        if ArticleStatus(status) != ArticleStatus.PUBLISHED:
            return
        missing = missing_locales(translations)
        if missing:
            raise PublishNotAllowedError([locale.value for locale in missing])

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Database error during %s: %s", operation, e)
            raise DatabaseError("Failed to save article", operation=operation) from e
