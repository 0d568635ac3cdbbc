from .article import ArticleResponse, ArticleWrite, TranslationInput, TranslationResponse
from .authoring import AuthoringSnapshot, LocaleDraftState
from .publication import (
    LanguageInfo,
    MethodPageResponse,
    PublicationCard,
    PublicationDetail,
    PublicationLink,
    SearchOutcome,
    SearchResultCard,
    SearchState,
)

# Define the public API of this module
__all__ = [
    "ArticleResponse",
    "ArticleWrite",
    "TranslationInput",
    "TranslationResponse",
    "AuthoringSnapshot",
    "LocaleDraftState",
    "LanguageInfo",
    "MethodPageResponse",
    "PublicationCard",
    "PublicationDetail",
    "PublicationLink",
    "SearchOutcome",
    "SearchResultCard",
    "SearchState",
]
