"""
Locale helpers

Pure functions for the closed set of site locales:
- the ``Locale`` enum and its display names
- coercion of untrusted locale strings (URL segments, query params)
- Accept-Language header parsing with quality-value (q=) support
"""

from __future__ import annotations

import enum

# ── Constants ─────────────────────────────────────────────────────────────────


class Locale(str, enum.Enum):
    """Locales the site publishes in. Closed set; anything else is invalid input."""

    en = "en"
    es = "es"
    fr = "fr"
    pt = "pt"


SUPPORTED_LOCALES: tuple[Locale, ...] = tuple(Locale)

_LOCALE_CODES: frozenset[str] = frozenset(locale.value for locale in Locale)

# Human-readable names, used by the "shown in <language>" fallback notice
LANGUAGE_NAMES: dict[Locale, str] = {
    Locale.en: "English",
    Locale.es: "Español",
    Locale.fr: "Français",
    Locale.pt: "Português",
}


# ── Public helpers ────────────────────────────────────────────────────────────


def is_supported_locale(value: str | None) -> bool:
    """Return True when ``value`` names one of the supported locales."""
    if not value:
        return False
    return value.strip().lower() in _LOCALE_CODES


def coerce_locale(value: str | None, default: Locale | str = Locale.en) -> Locale:
    """Return the ``Locale`` for ``value``, or ``default`` when it is unknown.

    Reader-facing routes never fail on an unknown locale segment; they render
    in the default language instead.
    """
    if is_supported_locale(value):
        return Locale(value.strip().lower())
    return Locale(default)


def parse_accept_language(header: str, supported: list[str]) -> str | None:
    """Parse an Accept-Language header and return the best matching locale.

    Algorithm:
    1. Split header into tags with optional q-values (default q=1.0).
    2. Sort by q-value descending.
    3. For each tag, try exact match in `supported`, then base-language match.
    4. Return the first match or None if nothing matches.

    Args:
        header:    Value of the Accept-Language HTTP header, e.g.
                   "fr-CA,fr;q=0.9,en-US;q=0.8,en;q=0.7".
        supported: Ordered list of locale codes the server supports.

    Returns:
        The best matching locale from `supported`, or None.
    """
    if not header:
        return None

    weighted: list[tuple[float, str]] = []
    for part in header.split(","):
        part = part.strip()
        if not part:
            continue
        if ";q=" in part:
            tag, q_str = part.split(";q=", 1)
            try:
                q = float(q_str.strip())
            except ValueError:
                q = 1.0
        else:
            tag = part
            q = 1.0
        weighted.append((q, tag.strip()))

    # Stable sort keeps header order between equal q-values
    weighted.sort(key=lambda x: x[0], reverse=True)

    supported_lower = [s.lower() for s in supported]

    for _, tag in weighted:
        tag_lower = tag.lower()
        if tag_lower in supported_lower:
            return supported[supported_lower.index(tag_lower)]
        # "pt-BR" → "pt"
        base = tag_lower.split("-")[0]
        if base in supported_lower:
            return supported[supported_lower.index(base)]

    return None


def get_language_info(locale: Locale | str) -> dict[str, str]:
    """Return ``{"code", "name"}`` for the given locale."""
    code = Locale(locale)
    return {"code": code.value, "name": LANGUAGE_NAMES[code]}
