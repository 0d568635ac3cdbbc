from dotenv import load_dotenv
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vibrant.i18n.locale import Locale

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Territoire Vibrant"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Database settings
    database_url: str

    # Security settings
    secret_key: str
    jwt_algorithm: str = "HS256"

    # CORS settings
    allowed_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    # i18n settings
    default_language: str = Locale.en.value
    fallback_language: str = Locale.en.value

    # Publications
    method_article_id: str | None = "54b06274-4781-4dbb-b028-cc5c329a6f81"
    footer_recent_limit: int = 4
    preview_max_paragraphs: int = 2
    preview_max_chars: int = 600

    # Search highlight sentinels; must not be Markdown syntax
    highlight_start: str = "‹‹HL››"
    highlight_end: str = "‹‹/HL››"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("default_language", "fallback_language")
    @classmethod
    def _known_locale(cls, value: str) -> str:
        return Locale(value.lower()).value

    @model_validator(mode="after")
    def _distinct_markers(self) -> "Settings":
        if not self.highlight_start or not self.highlight_end:
            raise ValueError("highlight markers must be non-empty")
        if self.highlight_start == self.highlight_end:
            raise ValueError("highlight_start and highlight_end must differ")
        return self


settings = Settings()
