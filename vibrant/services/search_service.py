"""
Search Service

Case-insensitive substring search over the titles and bodies readers can
see, returning cards with highlighted titles and excerpts.

The excerpt is cut before highlighting so a character budget can never
split a sentinel pair.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from vibrant.config import settings
from vibrant.i18n.locale import LANGUAGE_NAMES, Locale
from vibrant.i18n.resolution import resolve_article
from vibrant.schemas.publication import SearchOutcome, SearchResultCard, SearchState
from vibrant.services.article_service import ArticleService
from vibrant.utils.markdown import HighlightMarkers, build_preview, highlight_html, highlight_text, render_highlights

logger = logging.getLogger(__name__)


class SearchService:
    """Service for the public search page."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.articles = ArticleService(db)

    async def search(self, query: str | None, locale: Locale | str) -> SearchOutcome:
        """
        Search readable articles.

        A blank or whitespace-only query is the "enter a query" state and
        never reaches the database.

        Args:
            query: Raw query string from the search box
            locale: Locale the visitor reads in

        Returns:
            SearchOutcome with state enter_query, results or no_results
        """
        term = (query or "").strip()
        if not term:
            return SearchOutcome(query="", state=SearchState.ENTER_QUERY)

        locale = Locale(locale)
        markers = HighlightMarkers.from_settings()
        articles = await self.articles.search_articles(term, locale, settings.fallback_language)

        results = []
        for article in articles:
            if article.id == settings.method_article_id:
                continue
            resolved = resolve_article(article, locale, settings.fallback_language)
            if resolved is None:
                continue

            translation = resolved.translation
            preview = build_preview(
                translation.body_md,
                max_paragraphs=settings.preview_max_paragraphs,
                max_chars=settings.preview_max_chars,
            )
            results.append(
                SearchResultCard(
                    id=article.id,
                    title=translation.title,
                    title_html=highlight_html(translation.title, term, markers),
                    created_at=article.created_at,
                    locale=resolved.locale,
                    is_fallback=resolved.is_fallback,
                    language_name=LANGUAGE_NAMES[resolved.locale],
                    preview_md=render_highlights(highlight_text(preview, term, markers), markers),
                )
            )

        logger.info("Search: query=%r locale=%s results=%d", term, locale.value, len(results))
        state = SearchState.RESULTS if results else SearchState.NO_RESULTS
        return SearchOutcome(query=term, state=state, results=results)
