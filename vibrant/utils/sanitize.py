"""
Input Sanitization Utilities

HTML sanitization for text that is rendered as HTML by clients.
"""

import bleach
from typing import Optional, List


# Inline tags a highlighted search snippet may carry
HIGHLIGHT_TAGS = ['mark']

# Allowed protocols for URLs
ALLOWED_PROTOCOLS = ['http', 'https', 'mailto']


def sanitize_html(
    text: Optional[str],
    tags: Optional[List[str]] = None,
    attributes: Optional[dict] = None,
    strip: bool = False
) -> str:
    """
    Sanitize HTML content to prevent XSS attacks.

    Args:
        text: The HTML text to sanitize
        tags: List of allowed HTML tags (default: HIGHLIGHT_TAGS)
        attributes: Dict of allowed attributes per tag (default: none)
        strip: If True, drop disallowed tags instead of escaping them

    Returns:
        Sanitized HTML string
    """
    if text is None:
        return ""

    allowed_tags = tags if tags is not None else HIGHLIGHT_TAGS
    allowed_attrs = attributes if attributes is not None else {}

    return bleach.clean(
        text,
        tags=allowed_tags,
        attributes=allowed_attrs,
        protocols=ALLOWED_PROTOCOLS,
        strip=strip,
    )
