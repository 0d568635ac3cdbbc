"""
i18n (Internationalization) package

Locale helpers and the shared translation resolution rules used by every
reader-facing surface.
"""

from .locale import (
    LANGUAGE_NAMES,
    SUPPORTED_LOCALES,
    Locale,
    coerce_locale,
    get_language_info,
    is_supported_locale,
    parse_accept_language,
)

__all__ = [
    "LANGUAGE_NAMES",
    "SUPPORTED_LOCALES",
    "Locale",
    "coerce_locale",
    "get_language_info",
    "is_supported_locale",
    "parse_accept_language",
]
