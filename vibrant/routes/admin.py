"""
Admin article routes (prefix: /api/v1/admin, admin session required)

    GET  /articles                        → list with q / status / sort filters
    POST /articles                        → create article + translations
    GET  /articles/lookup/{identifier}    → by article id or translation id
    GET  /articles/{article_id}           → one article, all translations
    PUT  /articles/{article_id}           → set status, upsert translations
    GET  /articles/{article_id}/authoring → per-locale form state and gates
"""

import logging
from typing import Literal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from vibrant.auth import require_admin
from vibrant.authoring.state import initial_state
from vibrant.database import get_db
from vibrant.exceptions import ArticleNotFoundError
from vibrant.models.article import ArticleStatus
from vibrant.schemas.article import ArticleResponse, ArticleWrite
from vibrant.schemas.authoring import AuthoringSnapshot
from vibrant.services.article_service import ArticleService

router = APIRouter(tags=["Admin"], dependencies=[Depends(require_admin)])
logger = logging.getLogger(__name__)


@router.get("/articles", response_model=list[ArticleResponse])
async def list_articles(
    q: str | None = Query(None, max_length=200),
    status_filter: ArticleStatus | None = Query(None, alias="status"),
    sort: Literal["newest", "oldest"] = "newest",
    db: AsyncSession = Depends(get_db),
):
    return await ArticleService(db).list_articles(query=q, status=status_filter, sort=sort)


@router.post("/articles", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(payload: ArticleWrite, db: AsyncSession = Depends(get_db)):
    return await ArticleService(db).create_article(payload)


@router.get("/articles/lookup/{identifier}", response_model=ArticleResponse)
async def lookup_article(identifier: str, db: AsyncSession = Depends(get_db)):
    article = await ArticleService(db).get_article_by_translation_or_id(identifier)
    if article is None:
        raise ArticleNotFoundError(identifier)
    return article


@router.get("/articles/{article_id}", response_model=ArticleResponse)
async def get_article(article_id: str, db: AsyncSession = Depends(get_db)):
    article = await ArticleService(db).get_article_with_translations(article_id)
    if article is None:
        raise ArticleNotFoundError(article_id)
    return article


@router.put("/articles/{article_id}", response_model=ArticleResponse)
async def update_article(article_id: str, payload: ArticleWrite, db: AsyncSession = Depends(get_db)):
    return await ArticleService(db).update_article(article_id, payload)


@router.get("/articles/{article_id}/authoring", response_model=AuthoringSnapshot)
async def get_authoring_state(article_id: str, db: AsyncSession = Depends(get_db)):
    article = await ArticleService(db).get_article_with_translations(article_id)
    if article is None:
        raise ArticleNotFoundError(article_id)
    return AuthoringSnapshot.from_state(initial_state(article.id, article.status, article.translations))
