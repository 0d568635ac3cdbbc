"""
Markdown excerpt and search-highlight helpers

Highlighting is two-phase. ``highlight_text`` wraps matches in sentinel
markers that mean nothing to a Markdown parser, so the marked text can sit
inside Markdown source (and be excerpted, stored or re-parsed) without
breaking syntax. ``render_highlights`` turns the sentinels into ``<mark>``
only at the final render step.

The sentinel pair comes from settings (``highlight_start``/``highlight_end``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from vibrant.config import settings
from vibrant.utils.sanitize import sanitize_html

ELLIPSIS = "…"

# Blank lines may carry stray spaces or tabs
_PARAGRAPH_BREAK = re.compile(r"\n(?:[ \t]*\n)+")


@dataclass(frozen=True)
class HighlightMarkers:
    start: str
    end: str

    @classmethod
    def from_settings(cls) -> "HighlightMarkers":
        return cls(start=settings.highlight_start, end=settings.highlight_end)


def build_preview(body_md: str, max_paragraphs: int = 2, max_chars: int = 600) -> str:
    """Return the first ``max_paragraphs`` paragraphs, cut to ``max_chars``.

    Windows line endings are normalised first; paragraphs are split on blank
    (or whitespace-only) lines and re-joined with one blank line.
    The character budget is applied last; an ellipsis is appended only when
    something was cut.
    """
    trimmed = (body_md or "").replace("\r\n", "\n").replace("\r", "\n").strip()
    if not trimmed:
        return ""

    paragraphs = _PARAGRAPH_BREAK.split(trimmed)
    preview = "\n\n".join(paragraphs[:max_paragraphs])

    if len(preview) > max_chars:
        preview = f"{preview[:max_chars].rstrip()}{ELLIPSIS}"

    return preview


def _query_pattern(query: str) -> re.Pattern[str]:
    return re.compile(f"({re.escape(query)})", re.IGNORECASE)


def highlight_text(text: str, query: str, markers: HighlightMarkers | None = None) -> str:
    """Wrap every case-insensitive occurrence of ``query`` in sentinel markers."""
    if not query or not query.strip():
        return text
    markers = markers or HighlightMarkers.from_settings()
    return _query_pattern(query).sub(lambda m: f"{markers.start}{m.group(1)}{markers.end}", text)


def render_highlights(text: str, markers: HighlightMarkers | None = None) -> str:
    """Translate sentinel pairs into ``<mark>`` tags.

    A start marker without a matching end marker is left untouched.
    """
    markers = markers or HighlightMarkers.from_settings()
    parts: list[str] = []
    remaining = text

    while remaining:
        start_idx = remaining.find(markers.start)
        if start_idx == -1:
            parts.append(remaining)
            break

        after_start = remaining[start_idx + len(markers.start):]
        end_idx = after_start.find(markers.end)
        if end_idx == -1:
            parts.append(remaining)
            break

        parts.append(remaining[:start_idx])
        parts.append(f"<mark>{after_start[:end_idx]}</mark>")
        remaining = after_start[end_idx + len(markers.end):]

    return "".join(parts)


def highlight_segments(text: str, query: str) -> list[tuple[str, bool]]:
    """Split ``text`` into ``(chunk, is_match)`` pairs for the given query."""
    if not query or not query.strip():
        return [(text, False)] if text else []

    segments = []
    position = 0
    for match in _query_pattern(query).finditer(text):
        if match.start() > position:
            segments.append((text[position:match.start()], False))
        segments.append((match.group(1), True))
        position = match.end()
    if position < len(text):
        segments.append((text[position:], False))
    return segments


def highlight_html(text: str, query: str, markers: HighlightMarkers | None = None) -> str:
    """Plain text → HTML with matches in ``<mark>``; everything else escaped."""
    rendered = render_highlights(highlight_text(text, query, markers), markers)
    return sanitize_html(rendered, tags=["mark"], attributes={})
