"""
Article model

The language-independent publishing unit. All reader-visible text lives in
ArticleTranslation rows; the Article only carries the lifecycle status that
gates every translation.
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, Index, String
from sqlalchemy.orm import relationship

from vibrant.database import Base


class ArticleStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Article(Base):
    __tablename__ = "articles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    status = Column(
        Enum(ArticleStatus, name="publish_status"),
        default=ArticleStatus.DRAFT,
        nullable=False,
    )
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    translations = relationship(
        "ArticleTranslation",
        back_populates="article",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_article_status", "status"),
        Index("idx_article_created_at", "created_at"),
    )

    def translation_for(self, locale: str):
        """Return this article's translation in ``locale``, if any."""
        for translation in self.translations:
            if translation.locale == locale:
                return translation
        return None
