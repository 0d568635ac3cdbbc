from typing import Any

from pydantic import BaseModel, Field

from vibrant.i18n.locale import SUPPORTED_LOCALES, Locale
from vibrant.models.article import ArticleStatus


class LocaleDraftState(BaseModel):
    locale: Locale
    title: str
    body_md: str
    published: bool
    is_valid: bool = Field(..., description="Title and body both non-empty.")
    is_saved: bool = Field(..., description="The stored content matches this draft.")
    errors: dict[str, str] = Field(default_factory=dict, description="Field-level errors for partially filled locales.")


class AuthoringSnapshot(BaseModel):
    """What the authoring form needs to render its per-locale badges and buttons."""

    article_id: str | None
    status: ArticleStatus
    locales: list[LocaleDraftState]
    can_publish: bool
    can_archive: bool
    has_changes: bool

    @classmethod
    def from_state(cls, state: Any) -> "AuthoringSnapshot":
        return cls(
            article_id=state.article_id,
            status=state.status,
            locales=[
                LocaleDraftState(
                    locale=locale,
                    title=state.drafts[locale].title,
                    body_md=state.drafts[locale].body_md,
                    published=state.drafts[locale].published,
                    is_valid=state.drafts[locale].is_valid,
                    is_saved=state.is_saved(locale),
                    errors=state.drafts[locale].field_errors(),
                )
                for locale in SUPPORTED_LOCALES
            ],
            can_publish=state.can_publish,
            can_archive=state.can_archive,
            has_changes=state.has_changes,
        )
