from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from vibrant.i18n.locale import Locale
from vibrant.models.article import ArticleStatus


class TranslationInput(BaseModel):
    """One locale's content inside an article write."""

    locale: Locale = Field(..., description="Locale of this translation.")
    title: str = Field("", description="Plain-text title.")
    body_md: str = Field("", description="Markdown source of the body.")
    published: bool = Field(False, description="Whether readers may see this locale.")


class ArticleWrite(BaseModel):
    """Full locale→content map sent by the authoring form on save, publish or archive."""

    status: ArticleStatus = Field(ArticleStatus.DRAFT, description="Article-level lifecycle status.")
    translations: list[TranslationInput] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_locales(self) -> "ArticleWrite":
        seen: set[Locale] = set()
        for translation in self.translations:
            if translation.locale in seen:
                raise ValueError(f"Duplicate translation for locale '{translation.locale.value}'")
            seen.add(translation.locale)
        return self

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "DRAFT",
                "translations": [
                    {"locale": "en", "title": "Our method", "body_md": "# Method\n\nHow we work.", "published": False},
                ],
            }
        }
    )


class TranslationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    article_id: str
    locale: Locale
    title: str
    body_md: str
    published: bool
    created_at: datetime
    updated_at: datetime


class ArticleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    status: ArticleStatus
    created_at: datetime
    updated_at: datetime
    translations: list[TranslationResponse]

    @field_validator("translations", mode="before")
    @classmethod
    def _sorted_by_locale(cls, value):
        def key(item):
            return item["locale"] if isinstance(item, dict) else item.locale

        return sorted(value, key=key)
