from .article import Article, ArticleStatus
from .article_translation import ArticleTranslation

__all__ = [
    "Article",
    "ArticleStatus",
    "ArticleTranslation",
]
