"""
Tests for application settings
"""

import pytest
from pydantic import ValidationError

from vibrant.config import Settings


def _settings(**overrides):
    values = {"database_url": "sqlite+aiosqlite:///:memory:", "secret_key": "k"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestSettings:
    def test_defaults(self):
        settings = _settings()

        assert settings.default_language == "en"
        assert settings.fallback_language == "en"
        assert settings.footer_recent_limit == 4
        assert settings.preview_max_paragraphs == 2

    def test_language_codes_are_normalised(self):
        assert _settings(default_language="FR").default_language == "fr"

    def test_unsupported_language_rejected(self):
        with pytest.raises(ValidationError):
            _settings(fallback_language="de")

    def test_highlight_markers_must_differ(self):
        with pytest.raises(ValidationError):
            _settings(highlight_start="@@", highlight_end="@@")

    def test_highlight_markers_must_be_non_empty(self):
        with pytest.raises(ValidationError):
            _settings(highlight_end="")

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("FOOTER_RECENT_LIMIT", "6")
        monkeypatch.setenv("METHOD_ARTICLE_ID", "method-id")

        settings = _settings()

        assert settings.footer_recent_limit == 6
        assert settings.method_article_id == "method-id"
