"""
Markdown editor boundary

The rich-text widget round-trips through Markdown and normalizes as it goes,
so re-serializing unchanged content can produce a different but equivalent
string. ``MarkdownChangeGate`` sits between the widget and the form and only
forwards a change when the serialized Markdown differs from the last value it
knows about.
"""

from collections.abc import Callable


class MarkdownChangeGate:
    def __init__(self, on_change: Callable[[str], None], markdown: str = ""):
        self._on_change = on_change
        self._last = markdown

    @property
    def markdown(self) -> str:
        return self._last

    def set_markdown(self, markdown: str) -> None:
        """Load content into the editor; never reported as a change."""
        self._last = markdown

    def changed(self, markdown: str) -> bool:
        """Called by the widget after each edit. Returns True if forwarded."""
        if markdown == self._last:
            return False
        self._last = markdown
        self._on_change(markdown)
        return True
