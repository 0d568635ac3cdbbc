"""
Translation resolution

Decides which translation a visitor sees for a requested locale. Every
reader-facing surface (publications list, article detail, method page,
search results, footer digest) goes through ``resolve_article`` so the
fallback behaviour is identical everywhere.

Pure and side-effect free: safe to call concurrently on a shared snapshot.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from vibrant.config import settings
from vibrant.i18n.locale import Locale
from vibrant.models.article import ArticleStatus


@dataclass(frozen=True)
class ResolvedTranslation:
    """The translation chosen for display and whether it came from the fallback locale."""

    translation: Any
    is_fallback: bool

    @property
    def locale(self) -> Locale:
        return Locale(self.translation.locale)


def resolve_translation(
    translations: Iterable[Any],
    requested_locale: Locale | str,
    fallback_locale: Locale | str,
    require_published: bool,
) -> ResolvedTranslation | None:
    """Pick the translation to render.

    1. When ``require_published`` is set, only ``published`` translations are
       candidates (reader calls always set it; authoring calls never do).
    2. A translation in ``requested_locale`` wins.
    3. Otherwise a translation in ``fallback_locale`` is returned with
       ``is_fallback=True``.
    4. Otherwise ``None`` (not found).

    The result does not depend on the order of ``translations``.
    """
    requested = Locale(requested_locale)
    fallback = Locale(fallback_locale)

    by_locale = {}
    for translation in translations:
        if require_published and not translation.published:
            continue
        by_locale[Locale(translation.locale)] = translation

    if requested in by_locale:
        return ResolvedTranslation(translation=by_locale[requested], is_fallback=False)
    if fallback in by_locale:
        return ResolvedTranslation(translation=by_locale[fallback], is_fallback=True)
    return None


def resolve_article(
    article: Any,
    requested_locale: Locale | str,
    fallback_locale: Locale | str | None = None,
    require_published: bool = True,
) -> ResolvedTranslation | None:
    """Resolve a translation of ``article``, applying the Article-level gate.

    With ``require_published`` an article that is not PUBLISHED resolves to
    ``None`` whatever its translations' flags say.
    """
    if article is None:
        return None
    if require_published and article.status != ArticleStatus.PUBLISHED:
        return None
    if fallback_locale is None:
        fallback_locale = settings.fallback_language
    return resolve_translation(article.translations, requested_locale, fallback_locale, require_published)
