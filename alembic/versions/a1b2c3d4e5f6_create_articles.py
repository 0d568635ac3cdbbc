"""create_articles

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

Creates `articles` and `article_translations` (one row per article and
locale, unique on the pair).
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1b2c3d4e5f6"
down_revision: str | None = None
branch_labels = None
depends_on = None

publish_status = sa.Enum("DRAFT", "PUBLISHED", "ARCHIVED", name="publish_status")


def upgrade() -> None:
    op.create_table(
        "articles",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("status", publish_status, nullable=False, server_default="DRAFT"),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False),
    )
    op.create_index("idx_article_status", "articles", ["status"])
    op.create_index("idx_article_created_at", "articles", ["created_at"])

    op.create_table(
        "article_translations",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "article_id",
            sa.String(36),
            sa.ForeignKey("articles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("locale", sa.String(5), nullable=False),
        sa.Column("title", sa.String, nullable=False, server_default=""),
        sa.Column("body_md", sa.Text, nullable=False, server_default=""),
        sa.Column("published", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False),
        # One translation per (article, locale); upserts key on this
        sa.UniqueConstraint("article_id", "locale", name="uq_article_translation_locale"),
    )
    op.create_index("ix_article_translations_article_id", "article_translations", ["article_id"])
    op.create_index("idx_at_locale_published", "article_translations", ["locale", "published"])


def downgrade() -> None:
    op.drop_index("idx_at_locale_published", table_name="article_translations")
    op.drop_index("ix_article_translations_article_id", table_name="article_translations")
    op.drop_table("article_translations")
    op.drop_index("idx_article_created_at", table_name="articles")
    op.drop_index("idx_article_status", table_name="articles")
    op.drop_table("articles")
    publish_status.drop(op.get_bind(), checkfirst=True)
