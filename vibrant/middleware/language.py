"""
Language Detection Middleware

Sets request.state.locale (a ``Locale``) from:
  1. ``?locale=`` query parameter (the locale segment of reader URLs)
  2. X-Language request header
  3. Accept-Language header (quality-weighted, best-match)
  4. settings.default_language

Unknown values at any step fall through to the next one; the request never
fails because of its locale.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from vibrant.config import settings
from vibrant.i18n.locale import SUPPORTED_LOCALES, Locale, coerce_locale, is_supported_locale, parse_accept_language

if TYPE_CHECKING:
    from collections.abc import Callable

    from starlette.responses import Response

_SUPPORTED_CODES = [locale.value for locale in SUPPORTED_LOCALES]


def detect_locale(query_locale: str | None, x_language: str | None, accept_language: str | None) -> Locale:
    for candidate in (query_locale, x_language):
        if is_supported_locale(candidate):
            return coerce_locale(candidate)

    matched = parse_accept_language(accept_language or "", _SUPPORTED_CODES)
    return coerce_locale(matched, default=settings.default_language)


class LanguageMiddleware(BaseHTTPMiddleware):
    """Detect the request locale and attach it to request.state.locale."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.locale = detect_locale(
            request.query_params.get("locale"),
            request.headers.get("X-Language"),
            request.headers.get("Accept-Language"),
        )
        response = await call_next(request)
        response.headers["Content-Language"] = request.state.locale.value
        return response


def get_request_locale(request: Request) -> Locale:
    """FastAPI dependency: the locale detected for this request."""
    locale = getattr(request.state, "locale", None)
    if locale is None:
        locale = detect_locale(
            request.query_params.get("locale"),
            request.headers.get("X-Language"),
            request.headers.get("Accept-Language"),
        )
    return locale
