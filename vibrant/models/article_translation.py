"""
ArticleTranslation model

Stores per-locale content for Article records using the translation-table
pattern. Each row holds the title and Markdown body for one
(article, locale) pair.

One Article row + zero to four ArticleTranslation rows. The ``published``
flag is independent per locale; readers only see it while the parent
Article is PUBLISHED.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from vibrant.database import Base


class ArticleTranslation(Base):
    """Per-locale translation of an Article."""

    __tablename__ = "article_translations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    article_id = Column(
        String(36),
        ForeignKey("articles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    locale = Column(String(5), nullable=False)  # one of Locale

    # ── Translatable fields ───────────────────────────────────────────────────
    title = Column(String, nullable=False, default="")
    body_md = Column(Text, nullable=False, default="")

    published = Column(Boolean, nullable=False, default=False)

    created_at = Column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # String-referenced to avoid circular imports with article.py
    article = relationship("Article", back_populates="translations")

    __table_args__ = (
        # One translation per (article, locale) pair; upserts key on this
        UniqueConstraint("article_id", "locale", name="uq_article_translation_locale"),
        Index("idx_at_locale_published", "locale", "published"),
    )
