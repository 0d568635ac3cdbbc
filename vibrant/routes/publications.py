"""
Public publication routes

Two APIRouter objects exported from this module:

publications_router  (prefix: /api/v1)
    GET /publications                 → cards for the publications index
    GET /publications/recent          → footer "recent articles" links
    GET /publications/{article_id}    → article page
    GET /method                       → method page (publication may be null)
    GET /search?q=                    → search outcome

i18n_router  (prefix: /api/v1/i18n)
    GET /languages                    → supported locales

The reading locale comes from ``?locale=``, X-Language or Accept-Language
(see LanguageMiddleware); unknown values fall back to the default language.
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from vibrant.database import get_db
from vibrant.i18n.locale import SUPPORTED_LOCALES, Locale, get_language_info
from vibrant.middleware.language import get_request_locale
from vibrant.schemas.publication import (
    LanguageInfo,
    MethodPageResponse,
    PublicationCard,
    PublicationDetail,
    PublicationLink,
    SearchOutcome,
)
from vibrant.services.publication_service import PublicationService
from vibrant.services.search_service import SearchService

publications_router = APIRouter(tags=["Publications"])
i18n_router = APIRouter(tags=["Internationalization"])
logger = logging.getLogger(__name__)


@publications_router.get("/publications", response_model=list[PublicationCard])
async def list_publications(
    locale: Locale = Depends(get_request_locale),
    db: AsyncSession = Depends(get_db),
):
    return await PublicationService(db).list_publications(locale)


@publications_router.get("/publications/recent", response_model=list[PublicationLink])
async def recent_publications(
    limit: int | None = Query(None, ge=0, le=50),
    locale: Locale = Depends(get_request_locale),
    db: AsyncSession = Depends(get_db),
):
    return await PublicationService(db).recent_publications(locale, limit=limit)


@publications_router.get("/publications/{article_id}", response_model=PublicationDetail)
async def get_publication(
    article_id: str,
    locale: Locale = Depends(get_request_locale),
    db: AsyncSession = Depends(get_db),
):
    return await PublicationService(db).get_publication(article_id, locale)


@publications_router.get("/method", response_model=MethodPageResponse)
async def get_method_page(
    locale: Locale = Depends(get_request_locale),
    db: AsyncSession = Depends(get_db),
):
    return MethodPageResponse(publication=await PublicationService(db).get_method_page(locale))


@publications_router.get("/search", response_model=SearchOutcome)
async def search_publications(
    q: str = Query("", max_length=200),
    locale: Locale = Depends(get_request_locale),
    db: AsyncSession = Depends(get_db),
):
    return await SearchService(db).search(q, locale)


@i18n_router.get("/languages", response_model=list[LanguageInfo])
async def list_languages():
    return [LanguageInfo(**get_language_info(locale)) for locale in SUPPORTED_LOCALES]
