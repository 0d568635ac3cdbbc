import enum
from datetime import datetime

from pydantic import BaseModel, Field

from vibrant.i18n.locale import Locale


class PublicationCard(BaseModel):
    """A published article as shown in the publications list."""

    id: str
    title: str
    created_at: datetime
    locale: Locale = Field(..., description="Locale of the translation actually shown.")
    is_fallback: bool = Field(..., description="True when shown in the fallback locale.")
    language_name: str = Field(..., description="Display name of `locale`, for the fallback notice.")
    preview_md: str = Field(..., description="First paragraphs of the body, Markdown.")


class PublicationDetail(BaseModel):
    id: str
    title: str
    created_at: datetime
    locale: Locale
    is_fallback: bool
    language_name: str
    body_md: str


class PublicationLink(BaseModel):
    """Footer "recent articles" entry."""

    id: str
    title: str


class MethodPageResponse(BaseModel):
    """The method page; ``publication`` is null when nothing is readable."""

    publication: PublicationDetail | None = None


class SearchState(str, enum.Enum):
    ENTER_QUERY = "enter_query"
    RESULTS = "results"
    NO_RESULTS = "no_results"


class SearchResultCard(BaseModel):
    id: str
    title: str
    title_html: str = Field(..., description="Escaped title with matches wrapped in <mark>.")
    created_at: datetime
    locale: Locale
    is_fallback: bool
    language_name: str
    preview_md: str = Field(..., description="Markdown excerpt with matches wrapped in <mark>.")


class SearchOutcome(BaseModel):
    query: str
    state: SearchState
    results: list[SearchResultCard] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.results)


class LanguageInfo(BaseModel):
    code: str
    name: str
